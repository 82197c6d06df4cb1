"""Prometheus metrics for ledger activity, imports and storage health"""

from prometheus_client import Counter, Histogram

# Ledger activity
transactions_created_counter = Counter(
    "enriquecer_transactions_created_total",
    "Transactions recorded",
    ["type"],  # income | expense
)

transactions_removed_counter = Counter(
    "enriquecer_transactions_removed_total",
    "Transactions removed by id",
)

validation_rejections_counter = Counter(
    "enriquecer_validation_rejections_total",
    "Form drafts rejected by validation",
    ["field"],
)

# Backup
import_counter = Counter(
    "enriquecer_imports_total",
    "Backup imports attempted",
    ["outcome"],  # accepted | invalid | busy
)

# Storage
storage_fallback_counter = Counter(
    "enriquecer_storage_fallback_total",
    "Reads that fell back to the default because stored data was malformed",
    ["key"],
)

storage_failure_counter = Counter(
    "enriquecer_storage_failures_total",
    "Key-value store reads or writes that failed",
    ["operation"],  # read | write
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transaction_created(txn_type: str) -> None:
    transactions_created_counter.labels(type=txn_type).inc()


def record_validation_rejection(fields: list[str]) -> None:
    """Count each rejected field once per submission"""
    for name in set(fields):
        validation_rejections_counter.labels(field=name).inc()


def record_import(outcome: str) -> None:
    import_counter.labels(outcome=outcome).inc()
