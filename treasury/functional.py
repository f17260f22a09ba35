from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, Iterable, Optional, Sequence, TypeVar

from treasury.domain import KINDS, PENDING, Cheque, Movement, Transaction
from treasury.transforms import new_id

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def find_by_id(records: Iterable[T], record_id: str) -> Maybe[T]:
    for r in records:
        if getattr(r, "id", None) == record_id:
            return Some(r)
    return Nothing()


def _require(fields: Dict[str, Any], names: Sequence[str]) -> Either[dict, Dict[str, Any]]:
    missing = [
        n for n in names
        if fields.get(n) is None or (isinstance(fields[n], str) and not fields[n].strip())
    ]
    if missing:
        return Left({
            "error": "missing_fields",
            "message": "Please fill in all required fields: " + ", ".join(missing),
            "fields": missing,
        })
    return Right(fields)


def _positive_amount(fields: Dict[str, Any]) -> Either[dict, Dict[str, Any]]:
    raw = fields.get("amount")
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        amount = None
    if amount is None or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount must be a positive number, got {raw!r}",
            "fields": ["amount"],
        })
    return Right({**fields, "amount": amount})


def _known_kind(fields: Dict[str, Any]) -> Either[dict, Dict[str, Any]]:
    if fields.get("kind") not in KINDS:
        return Left({
            "error": "invalid_kind",
            "message": f"Kind must be one of {', '.join(KINDS)}, got {fields.get('kind')!r}",
            "fields": ["kind"],
        })
    return Right(fields)


def _strip(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_transaction(fields: Dict[str, Any]) -> Either[dict, Transaction]:
    """Validate raw form input and build a Transaction.

    A fresh id is generated unless ``fields`` carries one (edits).
    """
    required = ("date", "kind", "amount", "description", "category", "responsible")
    return (
        _require(fields, required)
        .bind(_known_kind)
        .bind(_positive_amount)
        .map(lambda f: Transaction(
            id=f.get("id") or new_id(),
            date=f["date"],
            kind=f["kind"],
            amount=f["amount"],
            description=_strip(f["description"]),
            category=f["category"],
            responsible=_strip(f["responsible"]),
            notes=_strip(f.get("notes")),
        ))
    )


def validate_cheque(fields: Dict[str, Any]) -> Either[dict, Cheque]:
    return (
        _require(fields, ("number", "amount", "payee", "issue_date"))
        .bind(_positive_amount)
        .map(lambda f: Cheque(
            id=f.get("id") or new_id(),
            number=_strip(f["number"]),
            amount=f["amount"],
            payee=_strip(f["payee"]),
            issue_date=f["issue_date"],
            clearing_date=None,
            status=PENDING,
        ))
    )


def validate_movement(fields: Dict[str, Any]) -> Either[dict, Movement]:
    return (
        _require(fields, ("date", "kind", "amount", "description"))
        .bind(_known_kind)
        .bind(_positive_amount)
        .map(lambda f: Movement(
            id=f.get("id") or new_id(),
            date=f["date"],
            kind=f["kind"],
            amount=f["amount"],
            description=_strip(f["description"]),
        ))
    )
