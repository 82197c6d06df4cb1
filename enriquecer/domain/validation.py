"""Validation of transaction drafts submitted from the entry forms"""

import math
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Union

from enriquecer.domain.categories import (
    DEFAULT_EXPENSE_CATEGORY,
    DEFAULT_INCOME_CATEGORY,
    INCOME_CATEGORIES,
    new_id,
    resolve_category_name,
)
from enriquecer.domain.models import Category, Expense, Income, Transaction, TransactionType
from enriquecer.utils.date_utils import is_iso_date, today_iso

# Leading number, the way a browser's parseFloat reads "12.5abc" as 12.5
_RX_NUM = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class TransactionDraft:
    """Raw values as typed into the income or expense form"""

    type: TransactionType
    description: str
    amount: Union[str, float, int, None]
    date: Optional[str] = None
    category_id: Optional[str] = None


@dataclass
class ValidationIssue:
    """One rejected field"""

    field: str
    message: str


@dataclass
class ValidationResult:
    """Either a ready-to-store transaction or the reasons there is none"""

    transaction: Optional[Transaction] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.transaction is not None and not self.issues


def parse_amount(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Parse a user-typed amount.

    Accepts a comma as decimal separator ("12,50"). Returns None when no
    leading number can be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    m = _RX_NUM.match(str(value).replace(",", ".", 1))
    if not m:
        return None
    return float(m.group(0))


def validate_draft(
    draft: TransactionDraft,
    expense_categories: Sequence[Category],
    income_categories: Sequence[Category] = INCOME_CATEGORIES,
    id_factory: Callable[[], str] = new_id,
) -> ValidationResult:
    """
    Turn a form draft into a transaction.

    Rules:
    - description must be non-blank (stored trimmed)
    - amount must parse to a finite number > 0
    - date must be a valid YYYY-MM-DD date (today when omitted)
    - expenses need a category id; unknown ids fall back to the default name
    """
    issues: List[ValidationIssue] = []

    description = (draft.description or "").strip()
    if not description:
        issues.append(ValidationIssue(field="description", message="Description is required"))

    amount = parse_amount(draft.amount)
    if amount is None or not math.isfinite(amount):
        issues.append(ValidationIssue(field="amount", message="Amount must be a number"))
    elif amount <= 0:
        issues.append(ValidationIssue(field="amount", message="Amount must be greater than zero"))

    txn_date = draft.date or today_iso()
    if not is_iso_date(txn_date):
        issues.append(ValidationIssue(field="date", message="Date must be YYYY-MM-DD"))

    if draft.type == TransactionType.EXPENSE and not draft.category_id:
        issues.append(ValidationIssue(field="category_id", message="Expenses need a category"))

    if issues:
        return ValidationResult(issues=issues)

    if draft.type == TransactionType.INCOME:
        transaction: Transaction = Income(
            id=id_factory(),
            date=txn_date,
            description=description,
            amount=amount,
            category=resolve_category_name(income_categories, draft.category_id, DEFAULT_INCOME_CATEGORY),
        )
    else:
        transaction = Expense(
            id=id_factory(),
            date=txn_date,
            description=description,
            amount=amount,
            category=resolve_category_name(expense_categories, draft.category_id, DEFAULT_EXPENSE_CATEGORY),
        )

    return ValidationResult(transaction=transaction)
