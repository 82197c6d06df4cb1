"""GET /v1/summary, /v1/series, /v1/years - dashboard and history figures"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from enriquecer.api.v1.schemas import (
    YEAR_MONTH_PATTERN,
    CategoryTotalSchema,
    MonthlyPointSchema,
    SeriesResponse,
    SummaryResponse,
    SummarySchema,
    YearsResponse,
)
from enriquecer.api.dependencies import get_record_store, get_request_id
from enriquecer.config import settings
from enriquecer.infrastructure.database.repositories import RecordStore
from enriquecer.domain.aggregation import (
    build_monthly_series,
    cumulative_summary,
    expense_by_category,
    month_summary,
    years_available,
)
from enriquecer.domain.exceptions import StorageError
from enriquecer.domain.models import Transaction
from enriquecer.utils.date_utils import current_year, current_year_month

router = APIRouter()


def _load(store: RecordStore, request: Request) -> List[Transaction]:
    try:
        return store.load()
    except StorageError as e:
        logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Storage unavailable")


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    request: Request,
    month: Optional[str] = Query(None, pattern=YEAR_MONTH_PATTERN, description="YYYY-MM, defaults to current month"),
    store: RecordStore = Depends(get_record_store),
):
    """
    Figures for the selected month.

    Returns:
        Month totals, cumulative totals through that month, and the month's
        expenses grouped by category
    """
    year_month = month or current_year_month()
    transactions = _load(store, request)

    return SummaryResponse(
        year_month=year_month,
        month=SummarySchema.from_domain(month_summary(transactions, year_month)),
        cumulative=SummarySchema.from_domain(cumulative_summary(transactions, year_month)),
        expense_by_category=[
            CategoryTotalSchema.from_domain(total)
            for total in expense_by_category(transactions, year_month, other_label=settings.other_category_label)
        ],
    )


@router.get("/series", response_model=SeriesResponse)
def get_series(request: Request, store: RecordStore = Depends(get_record_store)):
    """Monthly income/expense/result, oldest month first"""
    transactions = _load(store, request)
    return SeriesResponse(series=[MonthlyPointSchema.from_domain(p) for p in build_monthly_series(transactions)])


@router.get("/years", response_model=YearsResponse)
def get_years(request: Request, store: RecordStore = Depends(get_record_store)):
    """Years offered by the month picker"""
    transactions = _load(store, request)
    return YearsResponse(years=years_available(transactions, current_year()))
