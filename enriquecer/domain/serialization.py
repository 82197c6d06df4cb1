"""Conversion between domain entities and JSON-compatible dicts"""

import math
from typing import Any, Dict

from enriquecer.domain.exceptions import InvalidTransactionDataError
from enriquecer.domain.models import Category, Expense, Income, Transaction, TransactionType


def transaction_to_dict(txn: Transaction) -> Dict[str, Any]:
    """Persisted/exported shape of a transaction"""
    data: Dict[str, Any] = {
        "id": txn.id,
        "type": txn.type.value,
        "date": txn.date,
        "description": txn.description,
        "amount": txn.amount,
    }
    if txn.category is not None:
        data["category"] = txn.category
    return data


def transaction_from_dict(data: Any) -> Transaction:
    """
    Rebuild a transaction from its stored dict.

    Raises:
        InvalidTransactionDataError: On a missing field, unknown type or
            non-numeric amount
    """
    if not isinstance(data, dict):
        raise InvalidTransactionDataError(f"Expected an object, got {type(data).__name__}")

    missing = [name for name in ("id", "date", "description") if data.get(name) is None]
    if missing:
        raise InvalidTransactionDataError(f"Invalid transaction data: null or missing {', '.join(missing)}")

    try:
        txn_type = TransactionType(data["type"])
        amount = float(data["amount"])
        fields = {
            "id": str(data["id"]),
            "date": str(data["date"]),
            "description": str(data["description"]),
            "amount": amount,
        }
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidTransactionDataError(f"Invalid transaction data: {e}") from e

    if not math.isfinite(amount):
        raise InvalidTransactionDataError(f"Invalid amount: {data['amount']!r}")

    category = data.get("category")
    if txn_type == TransactionType.INCOME:
        return Income(category=str(category) if category is not None else None, **fields)
    # Imported records are not field-validated; an expense without a
    # category is reported under the "other" bucket.
    return Expense(category=str(category) if category is not None else "", **fields)


def category_to_dict(category: Category) -> Dict[str, str]:
    return {"id": category.id, "name": category.name}


def category_from_dict(data: Any) -> Category:
    if not isinstance(data, dict):
        raise InvalidTransactionDataError(f"Expected an object, got {type(data).__name__}")
    try:
        return Category(id=str(data["id"]), name=str(data["name"]))
    except KeyError as e:
        raise InvalidTransactionDataError(f"Invalid category data: missing {e}") from e
