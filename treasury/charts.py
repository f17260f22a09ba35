from typing import Iterable, Sequence, Tuple

import plotly.express as px
import plotly.graph_objects as go

from treasury.domain import MonthlySummary, PieSlice, RunningBalancePoint

INFLOW_COLORS = ["#4CAF50", "#8BC34A", "#CDDC39", "#FFEB3B", "#FFC107", "#FF9800"]
OUTFLOW_COLORS = ["#F44336", "#E91E63", "#9C27B0", "#673AB7", "#3F51B5", "#2196F3"]
TEMPLATE = "plotly_dark"


def monthly_bar(months: Sequence[MonthlySummary], currency: str = "") -> go.Figure:
    names = [m.name[:3] for m in months]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=names, y=[m.inflow for m in months], name="Inflow", marker_color=INFLOW_COLORS[0]))
    fig.add_trace(go.Bar(x=names, y=[m.outflow for m in months], name="Outflow", marker_color=OUTFLOW_COLORS[0]))
    fig.update_layout(
        barmode="group",
        title="Inflow and outflow by month",
        yaxis_title=f"Amount ({currency})" if currency else "Amount",
        template=TEMPLATE,
        margin=dict(t=40, b=10, l=10, r=10),
    )
    return fig


def _pie(slices: Iterable[PieSlice], title: str, colors) -> go.Figure:
    slices = list(slices)
    if not slices:
        fig = go.Figure()
        fig.update_layout(title=title, template=TEMPLATE)
        return fig
    return px.pie(
        names=[s.name for s in slices],
        values=[s.value for s in slices],
        title=title,
        color_discrete_sequence=colors,
        template=TEMPLATE,
    )


def category_pies(
    inflow: Iterable[PieSlice], outflow: Iterable[PieSlice]
) -> Tuple[go.Figure, go.Figure]:
    return (
        _pie(inflow, "Inflow by category", INFLOW_COLORS),
        _pie(outflow, "Outflow by category", OUTFLOW_COLORS),
    )


def running_balance_line(points: Sequence[RunningBalancePoint], currency: str = "") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[p.date for p in points],
            y=[p.cumulative_balance for p in points],
            mode="lines+markers",
            name="Balance",
        )
    )
    fig.update_layout(
        title="Balance evolution",
        yaxis_title=f"Balance ({currency})" if currency else "Balance",
        template=TEMPLATE,
        margin=dict(t=40, b=10, l=10, r=10),
    )
    return fig
