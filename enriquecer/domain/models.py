"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union


class TransactionType(str, Enum):
    """Direction of money; the amount itself is always positive"""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Income:
    """Money coming in. Category is optional for income."""

    id: str
    date: str  # ISO "YYYY-MM-DD"
    description: str
    amount: float
    category: Optional[str] = None

    type: ClassVar[TransactionType] = TransactionType.INCOME


@dataclass(frozen=True)
class Expense:
    """Money going out. Category is a name snapshot, not a reference."""

    id: str
    date: str  # ISO "YYYY-MM-DD"
    description: str
    amount: float
    category: str

    type: ClassVar[TransactionType] = TransactionType.EXPENSE


Transaction = Union[Income, Expense]


@dataclass(frozen=True)
class Category:
    """User-facing label attached to transactions"""

    id: str
    name: str


@dataclass
class Summary:
    """Income, expense and result over a window of transactions"""

    income: float
    expense: float
    result: float
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class CategoryTotal:
    """Sum of amounts for one category"""

    name: str
    value: float


@dataclass
class MonthlyPoint:
    """One bucket of the monthly series"""

    month: str  # "YYYY-MM"
    income: float
    expense: float
    result: float
