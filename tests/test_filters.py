from datetime import date

from treasury.domain import FilterSpec, Transaction
from treasury.filters import (
    by_category,
    by_date_range,
    by_month,
    by_text,
    by_year,
    inflow_only,
    predicates_for,
)

t1 = Transaction("t1", date(2024, 6, 15), "inflow", 100, "Youth offering", "Offerings", "Ana")
t2 = Transaction("t2", date(2023, 6, 1), "outflow", 40, "Chairs", "Furniture", "Pedro")


def test_by_year_and_month():
    assert by_year(2024)(t1)
    assert not by_year(2024)(t2)
    assert by_month(6)(t1) and by_month(6)(t2)
    assert not by_month(7)(t1)


def test_by_category_exact_match():
    assert by_category("Offerings")(t1)
    assert not by_category("offerings")(t1)
    assert not by_category("Offering")(t1)


def test_by_date_range_open_bounds():
    assert by_date_range(date(2024, 6, 15), None)(t1)
    assert by_date_range(None, date(2024, 6, 15))(t1)
    assert not by_date_range(date(2024, 6, 16), None)(t1)
    assert not by_date_range(None, date(2023, 5, 31))(t2)


def test_by_text_is_case_insensitive():
    assert by_text("YOUTH")(t1)
    assert by_text("pedro")(t2)
    assert by_text("furn")(t2)
    assert not by_text("salary")(t1)


def test_inflow_only():
    assert inflow_only(t1)
    assert not inflow_only(t2)


def test_predicates_for_empty_spec():
    assert predicates_for(FilterSpec()) == []


def test_predicates_for_ignores_blank_text():
    assert predicates_for(FilterSpec(text_query="")) == []


def test_predicates_for_counts_active_fields():
    spec = FilterSpec(
        year=2024,
        month=6,
        category="Offerings",
        date_from=date(2024, 1, 1),
        date_to=date(2024, 12, 31),
        text_query="youth",
        inflow_only=True,
    )
    preds = predicates_for(spec)

    assert len(preds) == 6
    assert all(p(t1) for p in preds)
    assert not all(p(t2) for p in preds)
