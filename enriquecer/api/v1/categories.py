"""/v1/categories - category catalogs and expense category management"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from enriquecer.api.v1.schemas import CategoryListResponse, CategoryRequest, CategorySchema
from enriquecer.api.dependencies import get_category_store, get_request_id
from enriquecer.infrastructure.database.session import get_db
from enriquecer.infrastructure.database.repositories import CategoryStore
from enriquecer.domain.categories import (
    INCOME_CATEGORIES,
    add_category,
    delete_category,
    find_category,
    rename_category,
)
from enriquecer.domain.exceptions import CategoryNotFoundError, InvalidCategoryError, StorageError

router = APIRouter()


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(
    request: Request,
    type: Literal["income", "expense"] = Query("expense", description="Which catalog"),
    store: CategoryStore = Depends(get_category_store),
):
    """Income categories are fixed; expense categories come from storage"""
    if type == "income":
        categories = INCOME_CATEGORIES
    else:
        try:
            categories = store.load()
        except StorageError as e:
            logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
            raise HTTPException(status_code=503, detail="Storage unavailable")

    return CategoryListResponse(type=type, categories=[CategorySchema.from_domain(c) for c in categories])


@router.post("/categories", response_model=CategorySchema, status_code=201)
def create_category(
    request_body: CategoryRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: CategoryStore = Depends(get_category_store),
):
    """Add an expense category"""
    request_id = get_request_id(request)

    try:
        categories = add_category(store.load(), request_body.name)
        store.save(categories)
        db.commit()

    except InvalidCategoryError as e:
        raise HTTPException(status_code=422, detail=str(e))

    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    logging.info("Category created", extra={"request_id": request_id, "category_id": categories[-1].id})
    return CategorySchema.from_domain(categories[-1])


@router.patch("/categories/{category_id}", response_model=CategorySchema)
def update_category(
    category_id: str,
    request_body: CategoryRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: CategoryStore = Depends(get_category_store),
):
    """Rename an expense category. Recorded transactions keep their old name."""
    request_id = get_request_id(request)

    try:
        categories = rename_category(store.load(), category_id, request_body.name)
        store.save(categories)
        db.commit()

    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidCategoryError as e:
        raise HTTPException(status_code=422, detail=str(e))

    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    return CategorySchema.from_domain(find_category(categories, category_id))


@router.delete("/categories/{category_id}", status_code=204)
def remove_category(
    category_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: CategoryStore = Depends(get_category_store),
):
    """Delete an expense category; unknown ids succeed without changes"""
    try:
        store.save(delete_category(store.load(), category_id))
        db.commit()
    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    return Response(status_code=204)
