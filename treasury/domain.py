from dataclasses import dataclass
from datetime import date
from typing import Optional

INFLOW = "inflow"
OUTFLOW = "outflow"
KINDS = (INFLOW, OUTFLOW)

PENDING = "pending"
CLEARED = "cleared"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class Transaction:
    id: str
    date: date
    kind: str          # "inflow" or "outflow"
    amount: float      # always >= 0, kind gives the sign
    description: str
    category: str      # free text, case-sensitive grouping key
    responsible: str
    notes: str = ""

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind == INFLOW else -self.amount


# A cheque issued by the treasury
@dataclass(frozen=True)
class Cheque:
    id: str
    number: str
    amount: float
    payee: str
    issue_date: date
    clearing_date: Optional[date] = None
    status: str = PENDING


# A fund-advance (petty cash) movement
@dataclass(frozen=True)
class Movement:
    id: str
    date: date
    kind: str
    amount: float
    description: str

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind == INFLOW else -self.amount


@dataclass(frozen=True)
class FilterSpec:
    year: Optional[int] = None
    month: Optional[int] = None        # 1..12
    category: Optional[str] = None
    date_from: Optional[date] = None   # inclusive
    date_to: Optional[date] = None     # inclusive
    text_query: Optional[str] = None
    inflow_only: bool = False


@dataclass(frozen=True)
class PeriodTotals:
    inflow: float
    outflow: float
    balance: float


@dataclass(frozen=True)
class MonthlySummary:
    month: int  # 1..12
    inflow: float
    outflow: float
    balance: float

    @property
    def name(self) -> str:
        return MONTH_NAMES[self.month - 1]


@dataclass(frozen=True)
class CategorySummary:
    category: str
    inflow: float
    outflow: float
    net: float


@dataclass(frozen=True)
class RunningBalancePoint:
    date: date
    cumulative_balance: float


@dataclass(frozen=True)
class PieSlice:
    name: str
    value: float
