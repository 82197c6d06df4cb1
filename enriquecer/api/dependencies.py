"""Dependency injection for FastAPI endpoints"""

import threading

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from enriquecer.infrastructure.database.session import get_db
from enriquecer.infrastructure.database.repositories import CategoryStore, KeyValueRepository, RecordStore

# Held while an uploaded backup is read and applied; a second upload is refused
import_lock = threading.Lock()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_kv_repository(db: Session = Depends(get_db)) -> KeyValueRepository:
    return KeyValueRepository(db)


def get_record_store(kv: KeyValueRepository = Depends(get_kv_repository)) -> RecordStore:
    """Provide the transaction store bound to this request's session"""
    return RecordStore(kv)


def get_category_store(kv: KeyValueRepository = Depends(get_kv_repository)) -> CategoryStore:
    """Provide the category store bound to this request's session"""
    return CategoryStore(kv)


def get_import_lock() -> threading.Lock:
    return import_lock
