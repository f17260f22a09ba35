"""Tabular views of treasury data for tables and CSV downloads."""

from typing import Any, Dict, Iterable

import pandas as pd

from treasury.domain import (
    CategorySummary,
    Cheque,
    MonthlySummary,
    Movement,
    PeriodTotals,
    Transaction,
)

TRANSACTION_COLUMNS = ["Date", "Kind", "Amount", "Description", "Category", "Responsible", "Notes"]
MONTHLY_COLUMNS = ["Month", "Inflow", "Outflow", "Balance"]
CATEGORY_COLUMNS = ["Category", "Inflow", "Outflow", "Net"]
CHEQUE_COLUMNS = ["Number", "Amount", "Payee", "Issue date", "Clearing date", "Status"]
MOVEMENT_COLUMNS = ["Date", "Kind", "Amount", "Description"]


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        [t.date, t.kind, t.amount, t.description, t.category, t.responsible, t.notes]
        for t in trans
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def monthly_frame(months: Iterable[MonthlySummary]) -> pd.DataFrame:
    rows = [[m.name, m.inflow, m.outflow, m.balance] for m in months]
    return pd.DataFrame(rows, columns=MONTHLY_COLUMNS)


def category_frame(cats: Iterable[CategorySummary]) -> pd.DataFrame:
    rows = [[c.category, c.inflow, c.outflow, c.net] for c in cats]
    return pd.DataFrame(rows, columns=CATEGORY_COLUMNS)


def totals_frame(t: PeriodTotals) -> pd.DataFrame:
    return pd.DataFrame(
        [["Total inflow", t.inflow], ["Total outflow", t.outflow], ["Balance", t.balance]],
        columns=["Item", "Value"],
    )


def cheques_frame(cheques: Iterable[Cheque]) -> pd.DataFrame:
    rows = [
        [c.number, c.amount, c.payee, c.issue_date, c.clearing_date, c.status]
        for c in cheques
    ]
    return pd.DataFrame(rows, columns=CHEQUE_COLUMNS)


def movements_frame(movs: Iterable[Movement]) -> pd.DataFrame:
    rows = [[m.date, m.kind, m.amount, m.description] for m in movs]
    return pd.DataFrame(rows, columns=MOVEMENT_COLUMNS)


def to_csv_bytes(frame: pd.DataFrame) -> bytes:
    return frame.to_csv(index=False).encode("utf-8")


def general_report_csv(report: Dict[str, Any]) -> bytes:
    """Sectioned CSV with summary, monthly and per-category tables."""
    result = report["result"]
    sections = [
        "General Report\n",
        'Period,"{}"\n\n'.format(report["period"].replace('"', '""')),
        "Summary\n",
        totals_frame(result["totals"]).to_csv(index=False),
        "\nMonthly\n",
        monthly_frame(result["monthly"]).to_csv(index=False),
        "\nBy category\n",
        category_frame(result["categories"]).to_csv(index=False),
    ]
    return "".join(sections).encode("utf-8")
