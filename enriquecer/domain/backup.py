"""Backup document format: export snapshot and import parsing"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from enriquecer.domain.exceptions import InvalidImportFileError
from enriquecer.domain.models import Transaction
from enriquecer.domain.serialization import transaction_to_dict

INVALID_FILE_MESSAGE = "Arquivo inválido."

# Exports written by earlier releases stored the list under "txs"
_LEGACY_KEY = "txs"


def build_export(transactions: Sequence[Transaction]) -> Dict[str, List[Dict[str, Any]]]:
    """Full snapshot as {"transactions": [...]}. No version field."""
    return {"transactions": [transaction_to_dict(t) for t in transactions]}


def render_export(transactions: Sequence[Transaction]) -> str:
    return json.dumps(build_export(transactions), ensure_ascii=False, indent=2)


def export_filename(prefix: str, now: Optional[datetime] = None) -> str:
    """e.g. enriquecer-dados-1718000000000.json (epoch milliseconds)"""
    now = now or datetime.now(timezone.utc)
    return f"{prefix}-{int(now.timestamp() * 1000)}.json"


def parse_import(content: Union[str, bytes]) -> List[Any]:
    """
    Extract the transaction list from an uploaded backup file.

    Only the top-level shape is checked: an object whose "transactions"
    field is an array. Individual records are passed through untouched.

    Raises:
        InvalidImportFileError: On unparseable JSON or any other shape
    """
    try:
        document = json.loads(content or "{}")
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidImportFileError(INVALID_FILE_MESSAGE) from e

    if not isinstance(document, dict):
        raise InvalidImportFileError(INVALID_FILE_MESSAGE)

    key = "transactions" if "transactions" in document else _LEGACY_KEY
    records = document.get(key)
    if not isinstance(records, list):
        raise InvalidImportFileError(INVALID_FILE_MESSAGE)

    return records
