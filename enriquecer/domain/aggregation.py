"""Reporting engine - monthly, cumulative and per-category summaries"""

from typing import Dict, Iterable, List, Sequence

from enriquecer.domain.models import (
    CategoryTotal,
    MonthlyPoint,
    Summary,
    Transaction,
    TransactionType,
)

DEFAULT_OTHER_LABEL = "Outros"


def month_key(date: str) -> str:
    """
    Month bucket of an ISO date: its first 7 characters ("YYYY-MM").

    No calendar validation happens here; a malformed date simply yields a key
    that matches no selector.
    """
    return date[:7]


def sort_desc_by_date(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Newest date first. Stable, so equal dates keep their input order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def group_by_category(
    transactions: Iterable[Transaction],
    other_label: str = DEFAULT_OTHER_LABEL,
) -> List[CategoryTotal]:
    """
    Sum amounts per category.

    Transactions without a category land in the `other_label` bucket.
    Output order is the order in which each category is first seen.
    """
    totals: Dict[str, float] = {}
    for txn in transactions:
        name = txn.category or other_label
        totals[name] = totals.get(name, 0.0) + txn.amount

    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def _summarize(transactions: List[Transaction]) -> Summary:
    income = sum((t.amount for t in transactions if t.type == TransactionType.INCOME), 0.0)
    expense = sum((t.amount for t in transactions if t.type == TransactionType.EXPENSE), 0.0)

    return Summary(
        income=income,
        expense=expense,
        result=income - expense,
        transactions=transactions,
    )


def month_summary(transactions: Sequence[Transaction], year_month: str) -> Summary:
    """Totals for the transactions dated inside `year_month`"""
    return _summarize([t for t in transactions if month_key(t.date) == year_month])


def cumulative_summary(transactions: Sequence[Transaction], year_month: str) -> Summary:
    """
    Totals from the start of history through `year_month`, inclusive.

    Plain string comparison is chronological because month keys are
    zero-padded and fixed-width.
    """
    return _summarize([t for t in transactions if month_key(t.date) <= year_month])


def expense_by_category(
    transactions: Sequence[Transaction],
    year_month: str,
    other_label: str = DEFAULT_OTHER_LABEL,
) -> List[CategoryTotal]:
    """Category breakdown of one month's expenses"""
    monthly = month_summary(transactions, year_month).transactions
    return group_by_category(
        [t for t in monthly if t.type == TransactionType.EXPENSE],
        other_label=other_label,
    )


def build_monthly_series(transactions: Iterable[Transaction]) -> List[MonthlyPoint]:
    """One point per distinct month, ascending by month key"""
    buckets: Dict[str, MonthlyPoint] = {}
    for txn in transactions:
        key = month_key(txn.date)
        point = buckets.get(key)
        if point is None:
            point = buckets[key] = MonthlyPoint(month=key, income=0.0, expense=0.0, result=0.0)

        if txn.type == TransactionType.INCOME:
            point.income += txn.amount
        else:
            point.expense += txn.amount
        point.result = point.income - point.expense

    return [buckets[key] for key in sorted(buckets)]


def years_available(transactions: Iterable[Transaction], current_year: str) -> List[str]:
    """Distinct years present in the data plus the current one, ascending"""
    years = {t.date[:4] for t in transactions}
    years.add(current_year)
    return sorted(years)
