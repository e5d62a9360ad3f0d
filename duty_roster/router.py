from __future__ import annotations
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from availability.names import resolve_names
from staff.service import fetch_active_staff

from .models import DUTY_ROLE_FIELDS
from .schema import DutyRosterSchema, DutyRosterCreate, DutyRosterUpdate, DutyRosterResolved
from . import service

duty_roster_router = APIRouter(prefix="/duty-rosters", tags=["Duty Rosters"])

DUPLICATE_DETAIL = "a duty roster already exists for this date"

# List roster entries, optionally for one month (month+year) or one year
@duty_roster_router.get("", response_model=list[DutyRosterSchema])
def list_duty_rosters(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9999),
    db: Session = Depends(get_db),
):
    return service.get_duty_rosters(db, month=month, year=year)

# Exact date lookup
@duty_roster_router.get("/by-date/{duty_date}", response_model=DutyRosterSchema)
def get_duty_roster_by_date(duty_date: date, db: Session = Depends(get_db)):
    obj = service.get_duty_roster_by_date(db, duty_date)
    if not obj:
        raise HTTPException(status_code=404, detail="duty roster not found")
    return obj

@duty_roster_router.get("/{roster_id}", response_model=DutyRosterSchema)
def get_duty_roster(roster_id: int, db: Session = Depends(get_db)):
    obj = service.get_duty_roster(db, roster_id)
    if not obj:
        raise HTTPException(status_code=404, detail="duty roster not found")
    return obj

# Names of every role matched against the active staff directory
@duty_roster_router.get("/{roster_id}/resolved", response_model=DutyRosterResolved)
def get_duty_roster_resolved(
    roster_id: int,
    case_sensitive: bool = Query(True),
    db: Session = Depends(get_db),
):
    obj = service.get_duty_roster(db, roster_id)
    if not obj:
        raise HTTPException(status_code=404, detail="duty roster not found")
    staff = fetch_active_staff(db)
    roles = {
        field: resolve_names(getattr(obj, field), staff, case_sensitive=case_sensitive)
        for field in DUTY_ROLE_FIELDS
    }
    return DutyRosterResolved(id=obj.id, duty_date=obj.duty_date, **roles)

@duty_roster_router.post("", response_model=DutyRosterSchema, status_code=status.HTTP_201_CREATED)
def create_duty_roster(payload: DutyRosterCreate, db: Session = Depends(get_db)):
    try:
        return service.create_duty_roster(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

@duty_roster_router.post("/bulk", response_model=list[DutyRosterSchema], status_code=status.HTTP_201_CREATED)
def bulk_create_duty_rosters(payload: list[DutyRosterCreate], db: Session = Depends(get_db)):
    try:
        return service.bulk_create_duty_rosters(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

@duty_roster_router.patch("/{roster_id}", response_model=DutyRosterSchema)
def update_duty_roster(roster_id: int, payload: DutyRosterUpdate, db: Session = Depends(get_db)):
    if not service.get_duty_roster(db, roster_id):
        raise HTTPException(status_code=404, detail="duty roster not found")
    try:
        return service.update_duty_roster(db, roster_id, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_DETAIL)

@duty_roster_router.delete("/{roster_id}")
def delete_duty_roster(roster_id: int, db: Session = Depends(get_db)):
    if not service.delete_duty_roster(db, roster_id):
        raise HTTPException(status_code=404, detail="duty roster not found")
    return {"message": "duty roster deleted"}
