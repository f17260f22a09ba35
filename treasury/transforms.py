import json
from datetime import date
from functools import reduce
from typing import Tuple, TypeVar
from uuid import uuid4

from treasury.domain import CLEARED, PENDING, Cheque, Movement, Transaction
from treasury.logging_setup import get_logger

logger = get_logger(__name__)

R = TypeVar("R", Transaction, Cheque, Movement)


def new_id() -> str:
    return uuid4().hex


def _parse_date(value):
    return date.fromisoformat(value) if value else None


def load_seed(
    path: str,
) -> Tuple[
    Tuple[Transaction, ...],
    Tuple[Cheque, ...],
    Tuple[Movement, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(
        Transaction(**{**t, "date": _parse_date(t["date"])})
        for t in data.get("transactions", [])
    )
    cheques = tuple(
        Cheque(
            **{
                **c,
                "issue_date": _parse_date(c["issue_date"]),
                "clearing_date": _parse_date(c.get("clearing_date")),
            }
        )
        for c in data.get("cheques", [])
    )
    movements = tuple(
        Movement(**{**m, "date": _parse_date(m["date"])}) for m in data.get("movements", [])
    )

    logger.info(
        "Loaded seed %s: %d transactions, %d cheques, %d movements",
        path,
        len(transactions),
        len(cheques),
        len(movements),
    )
    return transactions, cheques, movements


def _add(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    return records + (record,)


def _replace(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    return tuple(record if r.id == record.id else r for r in records)


def _remove(records: Tuple[R, ...], record_id: str) -> Tuple[R, ...]:
    return tuple(r for r in records if r.id != record_id)


def add_transaction(trans: Tuple[Transaction, ...], t: Transaction) -> Tuple[Transaction, ...]:
    logger.info("Adding transaction %s (%s %s)", t.id, t.kind, t.amount)
    return _add(trans, t)


def replace_transaction(trans: Tuple[Transaction, ...], t: Transaction) -> Tuple[Transaction, ...]:
    return _replace(trans, t)


def remove_transaction(trans: Tuple[Transaction, ...], tid: str) -> Tuple[Transaction, ...]:
    logger.info("Removing transaction %s", tid)
    return _remove(trans, tid)


def add_cheque(cheques: Tuple[Cheque, ...], c: Cheque) -> Tuple[Cheque, ...]:
    logger.info("Adding cheque %s (no. %s)", c.id, c.number)
    return _add(cheques, c)


def replace_cheque(cheques: Tuple[Cheque, ...], c: Cheque) -> Tuple[Cheque, ...]:
    return _replace(cheques, c)


def remove_cheque(cheques: Tuple[Cheque, ...], cid: str) -> Tuple[Cheque, ...]:
    logger.info("Removing cheque %s", cid)
    return _remove(cheques, cid)


def clear_cheque(cheques: Tuple[Cheque, ...], cid: str, on: date) -> Tuple[Cheque, ...]:
    """Mark a pending cheque as cleared on the given date.

    Cheques that are already cleared keep their original clearing date.
    """
    return tuple(
        Cheque(
            id=c.id,
            number=c.number,
            amount=c.amount,
            payee=c.payee,
            issue_date=c.issue_date,
            clearing_date=on,
            status=CLEARED,
        )
        if c.id == cid and c.status == PENDING
        else c
        for c in cheques
    )


def pending_cheques_total(cheques: Tuple[Cheque, ...]) -> float:
    return reduce(lambda acc, c: acc + c.amount if c.status == PENDING else acc, cheques, 0)


def add_movement(movs: Tuple[Movement, ...], m: Movement) -> Tuple[Movement, ...]:
    logger.info("Adding fund movement %s (%s %s)", m.id, m.kind, m.amount)
    return _add(movs, m)


def replace_movement(movs: Tuple[Movement, ...], m: Movement) -> Tuple[Movement, ...]:
    return _replace(movs, m)


def remove_movement(movs: Tuple[Movement, ...], mid: str) -> Tuple[Movement, ...]:
    logger.info("Removing fund movement %s", mid)
    return _remove(movs, mid)


def fund_balance(movs: Tuple[Movement, ...]) -> float:
    return reduce(lambda acc, m: acc + m.signed_amount, movs, 0)
