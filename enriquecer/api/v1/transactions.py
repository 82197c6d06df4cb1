"""/v1/transactions - record, list and remove income and expense entries"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from enriquecer.api.v1.schemas import (
    YEAR_MONTH_PATTERN,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionSchema,
    ValidationErrorResponse,
    ValidationIssueSchema,
)
from enriquecer.api.dependencies import get_category_store, get_record_store, get_request_id
from enriquecer.infrastructure.database.session import get_db
from enriquecer.infrastructure.database.repositories import CategoryStore, RecordStore
from enriquecer.domain.aggregation import month_summary
from enriquecer.domain.exceptions import StorageError
from enriquecer.domain.models import TransactionType
from enriquecer.domain.validation import TransactionDraft, validate_draft
from enriquecer.infrastructure.observability.metrics import (
    record_transaction_created,
    record_validation_rejection,
    transactions_removed_counter,
)
from enriquecer.infrastructure.observability.logging import log_transaction_event

router = APIRouter()


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    request: Request,
    month: Optional[str] = Query(None, pattern=YEAR_MONTH_PATTERN, description="Restrict to YYYY-MM"),
    store: RecordStore = Depends(get_record_store),
):
    """
    List stored transactions, newest first.

    With `month`, only that month's entries are returned.
    """
    try:
        transactions = store.load()
    except StorageError as e:
        logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    if month is not None:
        transactions = month_summary(transactions, month).transactions

    return TransactionListResponse(
        month=month,
        transactions=[TransactionSchema.from_domain(t) for t in transactions],
    )


@router.post(
    "/transactions",
    response_model=TransactionSchema,
    status_code=201,
    responses={422: {"model": ValidationErrorResponse}},
)
def create_transaction(
    request_body: TransactionCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: RecordStore = Depends(get_record_store),
    categories: CategoryStore = Depends(get_category_store),
):
    """
    Record an income or expense from an entry form.

    Flow:
    1. Validate the draft against the current category catalog
    2. Insert it into the date-sorted collection
    3. Persist the whole collection
    """
    request_id = get_request_id(request)
    draft = TransactionDraft(
        type=TransactionType(request_body.type),
        description=request_body.description,
        amount=request_body.amount,
        date=request_body.date,
        category_id=request_body.category_id,
    )

    try:
        result = validate_draft(draft, expense_categories=categories.load())
        if not result.is_valid:
            record_validation_rejection([issue.field for issue in result.issues])
            body = ValidationErrorResponse(
                issues=[ValidationIssueSchema(field=i.field, message=i.message) for i in result.issues]
            )
            return JSONResponse(status_code=422, content=body.model_dump())

        transactions = store.add(result.transaction)
        db.commit()

    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    txn = result.transaction
    record_transaction_created(txn.type.value)
    log_transaction_event(request_id, "created", txn.id, txn.type.value, len(transactions))

    return TransactionSchema.from_domain(txn)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: RecordStore = Depends(get_record_store),
):
    """Remove a transaction. Unknown ids succeed without changes."""
    request_id = get_request_id(request)

    try:
        before = len(store.load())
        transactions = store.remove(transaction_id)
        db.commit()
    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    if len(transactions) < before:
        transactions_removed_counter.inc()
        log_transaction_event(request_id, "removed", transaction_id, collection_size=len(transactions))

    return Response(status_code=204)
