from datetime import date
from typing import Callable, List, Optional

from treasury.domain import INFLOW, FilterSpec, Transaction

Predicate = Callable[[Transaction], bool]


def by_year(year: int) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.date.year == year

    return _filter


def by_month(month: int) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.date.month == month

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_date_range(start: Optional[date], end: Optional[date]) -> Predicate:
    def _filter(t: Transaction) -> bool:
        if start is not None and t.date < start:
            return False
        if end is not None and t.date > end:
            return False
        return True

    return _filter


def by_text(query: str) -> Predicate:
    needle = query.lower()

    def _filter(t: Transaction) -> bool:
        return (
            needle in t.description.lower()
            or needle in t.category.lower()
            or needle in t.responsible.lower()
        )

    return _filter


def inflow_only(t: Transaction) -> bool:
    return t.kind == INFLOW


def predicates_for(spec: FilterSpec) -> List[Predicate]:
    """Build the list of active predicates for a filter spec.

    Fields left as None (or an empty text query) add no constraint.
    """
    preds: List[Predicate] = []
    if spec.year is not None:
        preds.append(by_year(spec.year))
    if spec.month is not None:
        preds.append(by_month(spec.month))
    if spec.category is not None:
        preds.append(by_category(spec.category))
    if spec.date_from is not None or spec.date_to is not None:
        preds.append(by_date_range(spec.date_from, spec.date_to))
    if spec.text_query:
        preds.append(by_text(spec.text_query))
    if spec.inflow_only:
        preds.append(inflow_only)
    return preds
