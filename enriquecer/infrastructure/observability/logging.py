"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from enriquecer.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transaction_event(
    request_id: str,
    action: str,
    transaction_id: str,
    txn_type: str | None = None,
    collection_size: int | None = None,
) -> None:
    """Log a ledger mutation (created / removed)"""
    logging.info(
        "Transaction %s",
        action,
        extra={
            "request_id": request_id,
            "step": f"transaction_{action}",
            "transaction_id": transaction_id,
            "transaction_type": txn_type,
            "collection_size": collection_size,
        },
    )


def log_import(request_id: str, outcome: str, record_count: int, duration_ms: float) -> None:
    """Log backup import outcome for analysis"""
    logging.info(
        "Import completed",
        extra={
            "request_id": request_id,
            "step": "import_complete",
            "import_outcome": outcome,
            "record_count": record_count,
            "duration_ms": duration_ms,
        },
    )
