"""Integration tests for the key-value backed stores"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from enriquecer.domain.backup import build_export
from enriquecer.domain.categories import EXPENSE_CATEGORIES, rename_category, delete_category
from enriquecer.domain.exceptions import InvalidImportFileError, StorageError
from enriquecer.domain.models import Category, Expense, Income
from enriquecer.infrastructure.database.models import KeyValueEntry
from enriquecer.infrastructure.database.repositories import KeyValueRepository, RecordStore


def test_load_missing_key_returns_empty(store):
    assert store.load() == []


def test_load_malformed_json_returns_empty(db, store):
    """Test malformed stored JSON is treated as absent"""
    db.add(KeyValueEntry(key="transactions", value="{not json"))
    db.flush()

    assert store.load() == []


def test_load_non_list_document_returns_empty(kv, store):
    kv.set_json("transactions", {"transactions": []})
    assert store.load() == []


def test_load_skips_undecodable_entries(kv, store):
    kv.set_json(
        "transactions",
        [
            {"id": "1", "type": "income", "date": "2024-01-05", "description": "Pix", "amount": 10},
            {"id": "2", "type": "bogus"},
            "garbage",
        ],
    )

    assert [t.id for t in store.load()] == ["1"]


def test_save_is_visible_to_next_load(store, sample_transactions):
    store.save(sample_transactions)
    assert store.load() == sample_transactions


def test_add_keeps_date_descending_order(store):
    """Test insertion sorts newest first with the newest insertion winning ties"""
    store.add(Income(id="a", date="2024-01-05", description="a", amount=1.0))
    store.add(Income(id="b", date="2024-03-01", description="b", amount=1.0))
    store.add(Income(id="c", date="2024-01-05", description="c", amount=1.0))
    store.add(Income(id="d", date="2023-12-31", description="d", amount=1.0))

    assert [t.id for t in store.load()] == ["b", "c", "a", "d"]


def test_remove_by_id(store, sample_transactions):
    store.save(sample_transactions)

    remaining = store.remove("e2")

    assert "e2" not in [t.id for t in remaining]
    assert store.load() == remaining
    assert len(remaining) == len(sample_transactions) - 1


def test_remove_unknown_id_is_noop(store, sample_transactions):
    store.save(sample_transactions)

    store.remove("missing")

    assert store.load() == sample_transactions


def test_replace_all_rejects_non_list(store, sample_transactions):
    """Test bulk replace checks the top-level shape only"""
    store.save(sample_transactions)

    with pytest.raises(InvalidImportFileError):
        store.replace_all("not-a-list")

    assert store.load() == sample_transactions


def test_replace_all_round_trips_export(store, sample_transactions):
    """Test importing an export of the current state reproduces it"""
    store.save(sample_transactions)
    exported = build_export(store.load())

    store.replace_all([])
    assert store.load() == []

    store.replace_all(exported["transactions"])
    assert set(store.load()) == set(sample_transactions)


def test_stores_keep_separate_keys(store, category_store, sample_transactions):
    store.save(sample_transactions)
    category_store.save([Category(id="x", name="X")])

    assert store.load() == sample_transactions
    assert category_store.load() == [Category(id="x", name="X")]


def test_category_store_defaults(db, category_store):
    """Test absent and malformed catalogs fall back to defaults"""
    assert category_store.load() == EXPENSE_CATEGORIES

    db.add(KeyValueEntry(key="categories", value='[{"id": "x"}]'))
    db.flush()

    assert category_store.load() == EXPENSE_CATEGORIES


def test_category_changes_do_not_touch_transactions(store, category_store):
    """Test renaming or deleting a category leaves recorded names alone"""
    store.add(Expense(id="1", date="2024-01-10", description="Aluguel", amount=1500.0, category="Essenciais"))

    category_store.save(rename_category(category_store.load(), "essenciais", "Fixas"))
    category_store.save(delete_category(category_store.load(), "essenciais"))

    assert store.load()[0].category == "Essenciais"
    assert [c.id for c in category_store.load()] == ["supérfluos", "objetivos"]


def test_load_skips_records_with_null_fields(kv, store):
    """Test a null id makes the record undecodable instead of id "None" """
    kv.set_json(
        "transactions",
        [
            {"id": None, "type": "income", "date": "2024-01-05", "description": "Pix", "amount": 10},
            {"id": "2", "type": "income", "date": "2024-01-06", "description": "Pix", "amount": 20},
        ],
    )

    assert [t.id for t in store.load()] == ["2"]


def test_read_failure_raises_storage_error():
    """Test backend faults on read are surfaced, not replaced by a default"""
    session = MagicMock(spec=Session)
    session.get.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    store = RecordStore(KeyValueRepository(session))

    with pytest.raises(StorageError):
        store.load()


def test_write_failure_raises_storage_error():
    """Test backend faults on flush are surfaced"""
    session = MagicMock(spec=Session)
    session.get.return_value = None
    session.flush.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))
    store = RecordStore(KeyValueRepository(session))

    with pytest.raises(StorageError):
        store.add(Income(id="1", date="2024-01-05", description="Pix", amount=10.0))


def test_unserializable_value_raises_storage_error(kv):
    with pytest.raises(StorageError):
        kv.set_json("transactions", [object()])
