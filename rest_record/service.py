from __future__ import annotations
import logging
from datetime import date
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from staff.models import StaffMember
from .models import RestRecord
from .schema import RestRecordCreate, RestRecordCreatePayload, RestRecordUpdate

logger = logging.getLogger(__name__)

COPY_MARKER = "copied"


# -------- queries --------

def get_rest_records(db: Session, *, rest_date: Optional[date] = None) -> List[RestRecord]:
    """Newest first; optionally only one day."""
    stmt = select(RestRecord)
    if rest_date is not None:
        stmt = stmt.where(RestRecord.rest_date == rest_date)
    stmt = stmt.order_by(RestRecord.created_at.desc(), RestRecord.id.desc())
    return list(db.scalars(stmt))


def get_rest_record(db: Session, record_id: int) -> RestRecord | None:
    return db.get(RestRecord, record_id)


def check_rest_record_exists(db: Session, staff_id: int, rest_date: date) -> bool:
    stmt = select(func.count(RestRecord.id)).where(
        RestRecord.staff_id == staff_id,
        RestRecord.rest_date == rest_date,
    )
    return (db.scalar(stmt) or 0) > 0


# -------- mutations --------

def build_create_dto(db: Session, payload: RestRecordCreatePayload) -> RestRecordCreate:
    """Fill full_name from the directory when a staff_id is given."""
    full_name = (payload.full_name or "").strip()
    if payload.staff_id is not None:
        staff = db.get(StaffMember, payload.staff_id)
        if not staff:
            raise HTTPException(status_code=404, detail="staff member not found")
        full_name = staff.full_name
    return RestRecordCreate(
        staff_id=payload.staff_id,
        full_name=full_name,
        category=payload.category,
        rest_date=payload.rest_date,
        note=payload.note,
    )


def create_rest_record(db: Session, dto: RestRecordCreate, *, commit: bool = True) -> RestRecord:
    """
    commit=False only flushes, so a caller can batch several rows in one
    transaction. IntegrityError bubbles either way.
    """
    row = RestRecord(**dto.model_dump())
    db.add(row)
    if commit:
        db.commit()
        db.refresh(row)
    else:
        db.flush()
    return row


def update_rest_record(db: Session, record_id: int, patch: RestRecordUpdate) -> RestRecord:
    row = db.get(RestRecord, record_id)
    if not row:
        raise HTTPException(status_code=404, detail="rest record not found")

    data = patch.model_dump(exclude_unset=True)
    for required in ("full_name", "category", "rest_date"):
        if required in data and data[required] is None:
            raise HTTPException(status_code=422, detail=f"{required} cannot be null")
    for k, v in data.items():
        setattr(row, k, v)

    db.commit()
    db.refresh(row)
    return row


def delete_rest_record(db: Session, record_id: int) -> bool:
    row = db.get(RestRecord, record_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True


def copy_rest_records(db: Session, *, record_ids: list[int], target_date: date) -> dict:
    """
    Copy records to another day in one transaction. A record whose staff
    already rests on the target day is skipped; free-text records are
    always copied.
    """
    sources = list(db.scalars(
        select(RestRecord).where(RestRecord.id.in_(record_ids)).order_by(RestRecord.id.asc())
    ))
    if not sources:
        raise HTTPException(status_code=404, detail="rest records not found")

    copied = 0
    skipped = 0
    try:
        for src in sources:
            if src.staff_id is not None and check_rest_record_exists(db, src.staff_id, target_date):
                skipped += 1
                continue
            note = f"{src.note} ({COPY_MARKER})" if src.note else COPY_MARKER.capitalize()
            create_rest_record(
                db,
                RestRecordCreate(
                    staff_id=src.staff_id,
                    full_name=src.full_name,
                    category=src.category,
                    rest_date=target_date,
                    note=note,
                ),
                commit=False,
            )
            copied += 1
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("copied %d rest records to %s (%d skipped)", copied, target_date, skipped)
    return {"copied": copied, "skipped": skipped, "target_date": target_date}
