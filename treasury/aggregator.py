from collections import defaultdict
from functools import reduce
from itertools import accumulate
from typing import Dict, Iterable, Tuple

from treasury.domain import (
    INFLOW,
    MONTH_NAMES,
    OUTFLOW,
    CategorySummary,
    FilterSpec,
    MonthlySummary,
    PeriodTotals,
    PieSlice,
    RunningBalancePoint,
    Transaction,
)
from treasury.filters import predicates_for
from treasury.logging_setup import get_logger

logger = get_logger(__name__)

ASCENDING = "ascending"
DESCENDING = "descending"

_SORT_KEYS = {
    "amount": lambda t: t.amount,
    "date": lambda t: t.date,
    "category": lambda t: t.category,
}

_SUMMARY_SORT_KEYS = {
    "category": lambda s: s.category,
    "net": lambda s: s.net,
}


def _is_descending(direction: str) -> bool:
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Unknown sort direction: {direction!r}")
    return direction == DESCENDING


def filter_transactions(
    trans: Iterable[Transaction], spec: FilterSpec
) -> Tuple[Transaction, ...]:
    preds = predicates_for(spec)
    result = tuple(t for t in trans if all(p(t) for p in preds))
    logger.debug("filter kept %d transactions (%d predicates)", len(result), len(preds))
    return result


def sort_transactions(
    trans: Iterable[Transaction], key: str, direction: str = ASCENDING
) -> Tuple[Transaction, ...]:
    """Stable sort by amount, date or category.

    sorted() keeps equal keys in input order even with reverse=True.
    """
    if key not in _SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key!r}")
    return tuple(sorted(trans, key=_SORT_KEYS[key], reverse=_is_descending(direction)))


def _sum_kind(trans: Iterable[Transaction], kind: str) -> float:
    return reduce(lambda acc, t: acc + t.amount if t.kind == kind else acc, trans, 0)


def totals(trans: Iterable[Transaction]) -> PeriodTotals:
    trans = tuple(trans)
    inflow = _sum_kind(trans, INFLOW)
    outflow = _sum_kind(trans, OUTFLOW)
    return PeriodTotals(inflow=inflow, outflow=outflow, balance=inflow - outflow)


def monthly_summary(trans: Iterable[Transaction]) -> Tuple[MonthlySummary, ...]:
    inflow: Dict[int, float] = defaultdict(int)
    outflow: Dict[int, float] = defaultdict(int)
    for t in trans:
        if t.kind == INFLOW:
            inflow[t.date.month] += t.amount
        else:
            outflow[t.date.month] += t.amount

    return tuple(
        MonthlySummary(
            month=m,
            inflow=inflow[m],
            outflow=outflow[m],
            balance=inflow[m] - outflow[m],
        )
        for m in range(1, len(MONTH_NAMES) + 1)
    )


def category_summary(trans: Iterable[Transaction]) -> Tuple[CategorySummary, ...]:
    # dict keeps first-appearance order of categories
    sums: Dict[str, list] = {}
    for t in trans:
        bucket = sums.setdefault(t.category, [0, 0])
        if t.kind == INFLOW:
            bucket[0] += t.amount
        else:
            bucket[1] += t.amount

    return tuple(
        CategorySummary(category=cat, inflow=i, outflow=o, net=i - o)
        for cat, (i, o) in sums.items()
    )


def sort_category_summary(
    summaries: Iterable[CategorySummary], key: str, direction: str = ASCENDING
) -> Tuple[CategorySummary, ...]:
    if key not in _SUMMARY_SORT_KEYS:
        raise ValueError(f"Unknown summary sort key: {key!r}")
    return tuple(
        sorted(summaries, key=_SUMMARY_SORT_KEYS[key], reverse=_is_descending(direction))
    )


def running_balance(trans: Iterable[Transaction]) -> Tuple[RunningBalancePoint, ...]:
    ordered = sort_transactions(trans, "date", ASCENDING)
    cumulative = accumulate(t.signed_amount for t in ordered)
    return tuple(
        RunningBalancePoint(date=t.date, cumulative_balance=value)
        for t, value in zip(ordered, cumulative)
    )


def distinct_categories(trans: Iterable[Transaction]) -> Tuple[str, ...]:
    return tuple(sorted({t.category for t in trans}))


def category_pie(
    trans: Iterable[Transaction],
) -> Tuple[Tuple[PieSlice, ...], Tuple[PieSlice, ...]]:
    """Per-category amounts split into (inflow slices, outflow slices)."""
    inflow: Dict[str, float] = {}
    outflow: Dict[str, float] = {}
    for t in trans:
        target = inflow if t.kind == INFLOW else outflow
        target[t.category] = target.get(t.category, 0) + t.amount

    return (
        tuple(PieSlice(name, value) for name, value in inflow.items()),
        tuple(PieSlice(name, value) for name, value in outflow.items()),
    )


def period_description(spec: FilterSpec) -> str:
    if spec.date_from is not None and spec.date_to is not None:
        text = f"{spec.date_from:%d/%m/%Y} to {spec.date_to:%d/%m/%Y}"
    elif spec.month is not None and spec.year is not None:
        text = f"{MONTH_NAMES[spec.month - 1]}/{spec.year}"
    elif spec.month is not None:
        text = MONTH_NAMES[spec.month - 1]
    elif spec.year is not None:
        text = str(spec.year)
    else:
        text = "All periods"

    if spec.category is not None:
        text += f" - Category: {spec.category}"
    return text
