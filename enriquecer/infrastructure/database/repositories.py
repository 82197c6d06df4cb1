"""Data access layer: key-value documents, transaction records and categories"""

import json
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from enriquecer.config import settings
from enriquecer.domain.aggregation import sort_desc_by_date
from enriquecer.domain.categories import default_expense_categories
from enriquecer.domain.exceptions import InvalidImportFileError, InvalidTransactionDataError, StorageError
from enriquecer.domain.models import Category, Transaction
from enriquecer.domain.serialization import (
    category_from_dict,
    category_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)
from enriquecer.infrastructure.database.models import KeyValueEntry
from enriquecer.infrastructure.observability.metrics import (
    storage_fallback_counter,
    storage_failure_counter,
)


class KeyValueRepository:
    """JSON documents stored by key in the kv_entry table"""

    def __init__(self, db: Session):
        self.db = db

    def get_json(self, key: str, default: Any) -> Any:
        """
        Read and decode the document at `key`.

        Missing or malformed JSON yields `default`. Backend failures are not
        swallowed.

        Raises:
            StorageError: If the database cannot be read
        """
        try:
            entry = self.db.get(KeyValueEntry, key)
        except SQLAlchemyError as e:
            storage_failure_counter.labels(operation="read").inc()
            raise StorageError(f"Could not read {key!r}: {e}") from e

        if entry is None:
            return default

        try:
            return json.loads(entry.value)
        except ValueError:
            storage_fallback_counter.labels(key=key).inc()
            logging.warning("Malformed JSON stored under key, using default", extra={"key": key})
            return default

    def set_json(self, key: str, value: Any) -> None:
        """
        Serialize `value` and overwrite the document at `key`.

        Flushes so later reads on the same session see the new value.

        Raises:
            StorageError: If the value cannot be serialized or written
        """
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            storage_failure_counter.labels(operation="write").inc()
            raise StorageError(f"Could not serialize {key!r}: {e}") from e

        try:
            entry = self.db.get(KeyValueEntry, key)
            if entry is None:
                self.db.add(KeyValueEntry(key=key, value=raw))
            else:
                entry.value = raw
            self.db.flush()
        except SQLAlchemyError as e:
            storage_failure_counter.labels(operation="write").inc()
            raise StorageError(f"Could not write {key!r}: {e}") from e


class RecordStore:
    """Ordered transaction collection persisted as one JSON array"""

    def __init__(self, kv: KeyValueRepository, key: Optional[str] = None):
        self.kv = kv
        self.key = key or settings.transactions_key

    def load(self) -> List[Transaction]:
        """
        Current snapshot, newest first as stored.

        Entries that cannot be decoded are skipped; a non-array document is
        treated as absent.
        """
        raw = self.kv.get_json(self.key, [])
        if not isinstance(raw, list):
            storage_fallback_counter.labels(key=self.key).inc()
            logging.warning("Stored transactions are not a list, using default", extra={"key": self.key})
            return []

        transactions = []
        for index, item in enumerate(raw):
            try:
                transactions.append(transaction_from_dict(item))
            except InvalidTransactionDataError as e:
                logging.warning(f"Skipping stored transaction: {e}", extra={"key": self.key, "index": index})
        return transactions

    def save(self, transactions: Sequence[Transaction]) -> None:
        """Overwrite the whole collection"""
        self.kv.set_json(self.key, [transaction_to_dict(t) for t in transactions])

    def add(self, transaction: Transaction) -> List[Transaction]:
        """Insert a record, keeping the collection sorted by date descending"""
        transactions = sort_desc_by_date([transaction, *self.load()])
        self.save(transactions)
        return transactions

    def remove(self, transaction_id: str) -> List[Transaction]:
        """Drop the record with `transaction_id`; unknown ids are a no-op"""
        transactions = [t for t in self.load() if t.id != transaction_id]
        self.save(transactions)
        return transactions

    def replace_all(self, records: Any) -> None:
        """
        Bulk overwrite used by import.

        Only the top-level shape is validated; records are stored as given.

        Raises:
            InvalidImportFileError: If `records` is not a list
        """
        if not isinstance(records, list):
            raise InvalidImportFileError("Transactions must be a list")
        self.kv.set_json(self.key, records)


class CategoryStore:
    """User-managed expense categories persisted as one JSON array"""

    def __init__(self, kv: KeyValueRepository, key: Optional[str] = None):
        self.kv = kv
        self.key = key or settings.categories_key

    def load(self) -> List[Category]:
        """Stored catalog, or the default expense catalog when absent or malformed"""
        raw = self.kv.get_json(self.key, None)
        if raw is None:
            return default_expense_categories()

        try:
            if not isinstance(raw, list):
                raise InvalidTransactionDataError("Stored categories are not a list")
            return [category_from_dict(item) for item in raw]
        except InvalidTransactionDataError as e:
            storage_fallback_counter.labels(key=self.key).inc()
            logging.warning(f"Malformed categories, using default: {e}", extra={"key": self.key})
            return default_expense_categories()

    def save(self, categories: Sequence[Category]) -> None:
        self.kv.set_json(self.key, [category_to_dict(c) for c in categories])
