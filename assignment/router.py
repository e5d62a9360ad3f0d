from __future__ import annotations
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from core.inflight import registry, ActionInProgress
from availability import service as availability_service
from availability.names import resolve_names
from availability.schema import EligibilityRequest, EligibilityResponse
from staff.service import fetch_active_staff

from .models import SLOTS
from .schema import (
    AssignmentSchema,
    AssignmentCreate,
    AssignmentUpdate,
    AssignmentPage,
    AssignmentResolved,
    )
from . import service

logger = logging.getLogger(__name__)

assignment_router = APIRouter(prefix="/assignments", tags=["Assignments"])

DUPLICATE_DETAIL = "an assignment already exists for this date; edit the existing record instead"
SUBMIT_ACTION = "assignment-submit"

# Paged list, newest first, optional search over date and slot names
@assignment_router.get("", response_model=AssignmentPage)
def list_assignments(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    ):
    items, total = service.get_assignments(db, page=page, page_size=page_size, search=search)
    return AssignmentPage(items=items, total_count=total, page=page, page_size=page_size)

# Selectable staff for every slot of a draft
@assignment_router.post("/eligibility", response_model=EligibilityResponse)
def assignment_eligibility(
    payload: EligibilityRequest,
    db: Session = Depends(get_db),
    ):
    form_state = payload.model_dump(exclude={"assignment_date"})
    return availability_service.compute_pools(
        db, assignment_date=payload.assignment_date, form_state=form_state,
    )

@assignment_router.get("/by-date/{assignment_date}", response_model=AssignmentSchema)
def get_assignment_by_date(assignment_date: date, db: Session = Depends(get_db)):
    obj = service.get_assignment_by_date(db, assignment_date)
    if not obj:
        raise HTTPException(status_code=404, detail="assignment not found")
    return obj

# Create-or-update the record of a date
@assignment_router.put("/by-date/{assignment_date}", response_model=AssignmentSchema)
def upsert_assignment(
    assignment_date: date,
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    ):
    if payload.assignment_date != assignment_date:
        raise HTTPException(status_code=422, detail="assignment_date does not match the path")
    try:
        token = registry.claim(SUBMIT_ACTION, assignment_date)
    except ActionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    try:
        return service.upsert_assignment(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)
    finally:
        registry.release(token)

@assignment_router.get("/{assignment_id}", response_model=AssignmentSchema)
def get_assignment(assignment_id: int, db: Session = Depends(get_db)):
    obj = service.get_assignment(db, assignment_id)
    if not obj:
        raise HTTPException(status_code=404, detail="assignment not found")
    return obj

# Slot names matched against the active staff directory
@assignment_router.get("/{assignment_id}/resolved", response_model=AssignmentResolved)
def get_assignment_resolved(assignment_id: int, db: Session = Depends(get_db)):
    obj = service.get_assignment(db, assignment_id)
    if not obj:
        raise HTTPException(status_code=404, detail="assignment not found")
    staff = fetch_active_staff(db)
    slots = {s.value: resolve_names(getattr(obj, s.value), staff) for s in SLOTS}
    return AssignmentResolved(id=obj.id, assignment_date=obj.assignment_date, slots=slots)

@assignment_router.post("", response_model=AssignmentSchema, status_code=status.HTTP_201_CREATED)
def create_assignment(payload: AssignmentCreate, db: Session = Depends(get_db)):
    try:
        token = registry.claim(SUBMIT_ACTION, payload.assignment_date)
    except ActionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    try:
        return service.create_assignment(db, payload)
    except IntegrityError:
        db.rollback()
        logger.info("rejected duplicate assignment for %s", payload.assignment_date)
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)
    finally:
        registry.release(token)

@assignment_router.patch("/{assignment_id}", response_model=AssignmentSchema)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    ):
    if not service.get_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="assignment not found")
    try:
        return service.update_assignment(db, assignment_id, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

@assignment_router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    if not service.get_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="assignment not found")
    service.delete_assignment(db, assignment_id)
    return {"message": "assignment deleted"}
