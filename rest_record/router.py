from __future__ import annotations
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.inflight import registry, ActionInProgress

from .schema import (
    RestRecordSchema,
    RestRecordCreatePayload,
    RestRecordUpdate,
    RestRecordCopyRequest,
    RestRecordCopyResponse,
    AutoGenerateRequest,
    AutoGenerateResponse,
)
from . import service
from .auto_generate_service import auto_generate as auto_generate_service, RestGenerationError

rest_record_router = APIRouter(prefix="/rest-records", tags=["Rest Records"])

AUTO_GENERATE_ACTION = "rest-auto-generate"

# List rest records, optionally for one day
@rest_record_router.get("", response_model=list[RestRecordSchema])
def list_rest_records(
    rest_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    return service.get_rest_records(db, rest_date=rest_date)

@rest_record_router.get("/exists")
def rest_record_exists(
    staff_id: int = Query(...),
    rest_date: date = Query(...),
    db: Session = Depends(get_db),
):
    return {"exists": service.check_rest_record_exists(db, staff_id, rest_date)}

@rest_record_router.get("/{record_id}", response_model=RestRecordSchema)
def get_rest_record(record_id: int, db: Session = Depends(get_db)):
    obj = service.get_rest_record(db, record_id)
    if not obj:
        raise HTTPException(status_code=404, detail="rest record not found")
    return obj

@rest_record_router.post("", response_model=RestRecordSchema, status_code=status.HTTP_201_CREATED)
def create_rest_record(payload: RestRecordCreatePayload, db: Session = Depends(get_db)):
    dto = service.build_create_dto(db, payload)
    return service.create_rest_record(db, dto)

# Fill the day with rest records for last night's nurses
@rest_record_router.post("/auto-generate", response_model=AutoGenerateResponse)
def run_auto_generate(payload: AutoGenerateRequest, db: Session = Depends(get_db)):
    try:
        token = registry.claim(AUTO_GENERATE_ACTION, payload.target_date)
    except ActionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    try:
        return auto_generate_service(db=db, target_date=payload.target_date)
    except RestGenerationError as e:
        raise HTTPException(status_code=503, detail=f"{e}; no records were created, please retry")
    finally:
        registry.release(token)

@rest_record_router.post("/copy", response_model=RestRecordCopyResponse)
def copy_rest_records(payload: RestRecordCopyRequest, db: Session = Depends(get_db)):
    return service.copy_rest_records(db, record_ids=payload.record_ids, target_date=payload.target_date)

@rest_record_router.patch("/{record_id}", response_model=RestRecordSchema)
def update_rest_record(record_id: int, payload: RestRecordUpdate, db: Session = Depends(get_db)):
    if not service.get_rest_record(db, record_id):
        raise HTTPException(status_code=404, detail="rest record not found")
    return service.update_rest_record(db, record_id, payload)

@rest_record_router.delete("/{record_id}")
def delete_rest_record(record_id: int, db: Session = Depends(get_db)):
    if not service.delete_rest_record(db, record_id):
        raise HTTPException(status_code=404, detail="rest record not found")
    return {"message": "rest record deleted"}
