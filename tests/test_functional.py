from datetime import date

import pytest

from treasury.domain import PENDING, Cheque
from treasury.functional import (
    Either,
    Left,
    Nothing,
    Right,
    Some,
    find_by_id,
    validate_cheque,
    validate_movement,
    validate_transaction,
)


def tx_fields(**overrides):
    fields = {
        "date": date(2025, 3, 2),
        "kind": "inflow",
        "amount": 250,
        "description": "Sunday offering",
        "category": "Offerings",
        "responsible": "Ana",
        "notes": "",
    }
    fields.update(overrides)
    return fields


def test_maybe_map():
    doubled = Some(5).map(lambda x: x * 2)

    assert doubled.is_some()
    assert doubled.get_or_else(0) == 10

    mapped_nothing = Nothing().map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_either_bind():
    def safe_divide(x: int) -> Either[str, int]:
        if x == 0:
            return Left("Division by zero")
        return Right(10 // x)

    assert Right(2).bind(safe_divide) == Right(5)
    assert Right(0).bind(safe_divide).get_error() == "Division by zero"
    assert Left("original error").bind(safe_divide).get_error() == "original error"

    with pytest.raises(ValueError):
        Right(1).get_error()


def test_find_by_id():
    cheque = Cheque("c1", "0001", 500, "Printer Co", date(2025, 2, 1))

    assert find_by_id((cheque,), "c1") == Some(cheque)
    assert find_by_id((cheque,), "c9").is_none()
    assert find_by_id((), "c1") == Nothing()


def test_validate_transaction_success():
    result = validate_transaction(tx_fields(description="  Sunday offering  "))

    assert result.is_right()
    t = result.get_or_else(None)
    assert t.amount == 250.0
    assert t.description == "Sunday offering"
    assert t.category == "Offerings"
    assert t.id


def test_validate_transaction_keeps_given_id():
    result = validate_transaction(tx_fields(id="t42"))

    assert result.get_or_else(None).id == "t42"


def test_validate_transaction_missing_fields():
    result = validate_transaction(tx_fields(description="", responsible="   "))

    assert result.is_left()
    error = result.get_error()
    assert error["error"] == "missing_fields"
    assert error["fields"] == ["description", "responsible"]


@pytest.mark.parametrize("amount", [0, -10, "abc"])
def test_validate_transaction_invalid_amount(amount):
    result = validate_transaction(tx_fields(amount=amount))

    assert result.is_left()
    assert result.get_error()["error"] == "invalid_amount"


def test_validate_transaction_invalid_kind():
    result = validate_transaction(tx_fields(kind="transfer"))

    assert result.get_error()["error"] == "invalid_kind"


def test_validate_cheque_starts_pending():
    result = validate_cheque({
        "number": "000123",
        "amount": "800",
        "payee": "EDM",
        "issue_date": date(2025, 4, 1),
    })

    cheque = result.get_or_else(None)
    assert cheque.status == PENDING
    assert cheque.clearing_date is None
    assert cheque.amount == 800.0


def test_validate_cheque_missing_payee():
    result = validate_cheque({"number": "1", "amount": 5, "payee": "", "issue_date": date(2025, 4, 1)})

    assert result.get_error()["fields"] == ["payee"]


def test_validate_movement():
    ok = validate_movement({"date": date(2025, 1, 2), "kind": "outflow", "amount": 90, "description": "Transport"})
    bad = validate_movement({"date": None, "kind": "outflow", "amount": 90, "description": "Transport"})

    assert ok.is_right()
    assert ok.get_or_else(None).kind == "outflow"
    assert bad.get_error()["error"] == "missing_fields"
