"""/v1/backup - JSON export and import of the whole transaction collection"""

import logging
import threading
import time

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from enriquecer.api.v1.schemas import ImportResponse
from enriquecer.api.dependencies import get_import_lock, get_record_store, get_request_id
from enriquecer.config import settings
from enriquecer.infrastructure.database.session import get_db
from enriquecer.infrastructure.database.repositories import RecordStore
from enriquecer.domain.backup import export_filename, parse_import, render_export
from enriquecer.domain.exceptions import InvalidImportFileError, StorageError
from enriquecer.infrastructure.observability.metrics import record_import
from enriquecer.infrastructure.observability.logging import log_import

router = APIRouter()


@router.get("/backup/export")
def export_backup(request: Request, store: RecordStore = Depends(get_record_store)):
    """Download every transaction as {"transactions": [...]}"""
    try:
        transactions = store.load()
    except StorageError as e:
        logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    filename = export_filename(settings.export_filename_prefix)
    return Response(
        content=render_export(transactions),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/backup/import", response_model=ImportResponse)
async def import_backup(
    request: Request,
    db: Session = Depends(get_db),
    store: RecordStore = Depends(get_record_store),
    lock: threading.Lock = Depends(get_import_lock),
):
    """
    Replace the whole collection with an uploaded backup file.

    Flow:
    1. Refuse if another import is still being read (409)
    2. Read the body and check its top-level shape (400 on failure)
    3. Overwrite the collection; nothing changes unless step 2 passed
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if not lock.acquire(blocking=False):
        record_import("busy")
        raise HTTPException(status_code=409, detail="Another import is in progress")

    try:
        content = await request.body()
        records = parse_import(content)
        store.replace_all(records)
        db.commit()

    except InvalidImportFileError as e:
        db.rollback()
        record_import("invalid")
        logging.warning(f"Invalid import file: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except StorageError as e:
        db.rollback()
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Storage unavailable")

    finally:
        lock.release()

    duration_ms = (time.time() - start_time) * 1000
    record_import("accepted")
    log_import(request_id, "accepted", len(records), duration_ms)

    return ImportResponse(imported=len(records))
