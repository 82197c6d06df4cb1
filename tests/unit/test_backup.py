"""Unit tests for the backup document format and record serialization"""

import json
import pytest
from datetime import datetime, timezone
from enriquecer.domain.backup import build_export, export_filename, parse_import, render_export
from enriquecer.domain.exceptions import InvalidImportFileError, InvalidTransactionDataError
from enriquecer.domain.models import Expense, Income
from enriquecer.domain.serialization import transaction_from_dict, transaction_to_dict


def test_transaction_to_dict_omits_missing_income_category():
    income = Income(id="1", date="2024-01-05", description="Pix", amount=10.0)

    assert transaction_to_dict(income) == {
        "id": "1",
        "type": "income",
        "date": "2024-01-05",
        "description": "Pix",
        "amount": 10.0,
    }


def test_transaction_from_dict_builds_tagged_variant():
    expense = transaction_from_dict(
        {"id": "2", "type": "expense", "date": "2024-01-10", "description": "Aluguel", "amount": 1500, "category": "Essenciais"}
    )

    assert expense == Expense(id="2", date="2024-01-10", description="Aluguel", amount=1500.0, category="Essenciais")


@pytest.mark.parametrize(
    "data",
    [
        "not-an-object",
        {"id": "1", "type": "transfer", "date": "2024-01-05", "description": "x", "amount": 1},
        {"id": "1", "type": "income", "date": "2024-01-05", "description": "x"},
        {"id": "1", "type": "income", "date": "2024-01-05", "description": "x", "amount": "abc"},
        {"id": "1", "type": "income", "date": "2024-01-05", "description": "x", "amount": "nan"},
        {"id": None, "type": "income", "date": "2024-01-05", "description": "x", "amount": 1},
        {"id": "1", "type": "income", "date": None, "description": "x", "amount": 1},
        {"id": "1", "type": "expense", "date": "2024-01-05", "description": None, "amount": 1, "category": "A"},
    ],
)
def test_transaction_from_dict_rejects_malformed(data):
    with pytest.raises(InvalidTransactionDataError):
        transaction_from_dict(data)


def test_build_export_shape(sample_transactions):
    """Test export is {"transactions": [...]} with no version field"""
    document = build_export(sample_transactions)

    assert list(document) == ["transactions"]
    assert len(document["transactions"]) == len(sample_transactions)
    assert document["transactions"][0]["id"] == "e3"


def test_render_export_keeps_accents(sample_transactions):
    rendered = render_export(sample_transactions)

    assert "Salário" in rendered
    assert json.loads(rendered) == build_export(sample_transactions)


def test_export_filename_uses_epoch_millis():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert export_filename("enriquecer-dados", now) == "enriquecer-dados-1704067200000.json"


def test_parse_import_accepts_transactions_list():
    records = parse_import(b'{"transactions": [{"id": "1"}]}')
    assert records == [{"id": "1"}]


def test_parse_import_accepts_legacy_key():
    assert parse_import('{"txs": []}') == []


@pytest.mark.parametrize(
    "content",
    [
        '{"transactions": "not-an-array"}',
        '{"transactions": "not-an-array", "txs": []}',
        '{"other": []}',
        "[]",
        "{not json",
        "",
        b"\xff\xfe",
    ],
)
def test_parse_import_rejects_other_shapes(content):
    with pytest.raises(InvalidImportFileError, match="Arquivo inválido."):
        parse_import(content)
