from __future__ import annotations
import logging
from datetime import date
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func, or_, cast, String
from sqlalchemy.orm import Session

from .models import AssignmentRecord, SLOTS
from .schema import AssignmentCreate, AssignmentUpdate

logger = logging.getLogger(__name__)


def _search_clause(term: str):
    needle = term.strip().lower()
    return or_(
        cast(AssignmentRecord.assignment_date, String).contains(needle),
        *[func.lower(getattr(AssignmentRecord, s.value)).contains(needle) for s in SLOTS],
    )


# LIST, newest date first
def get_assignments(
    db: Session,
    *,
    page: int = 1,
    page_size: int = 10,
    search: Optional[str] = None,
) -> tuple[List[AssignmentRecord], int]:
    stmt = select(AssignmentRecord)
    count_stmt = select(func.count(AssignmentRecord.id))
    if search and search.strip():
        clause = _search_clause(search)
        stmt = stmt.where(clause)
        count_stmt = count_stmt.where(clause)

    total = db.scalar(count_stmt) or 0
    stmt = (
        stmt.order_by(AssignmentRecord.assignment_date.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return list(db.scalars(stmt)), total


def get_assignment(db: Session, assignment_id: int) -> AssignmentRecord | None:
    return db.get(AssignmentRecord, assignment_id)


def get_assignment_by_date(db: Session, assignment_date: date) -> AssignmentRecord | None:
    stmt = select(AssignmentRecord).where(AssignmentRecord.assignment_date == assignment_date)
    return db.scalars(stmt).first()


def create_assignment(db: Session, dto: AssignmentCreate) -> AssignmentRecord:
    row = AssignmentRecord(**dto.model_dump())
    db.add(row)
    # Let IntegrityError bubble; router maps to 409 on duplicate date
    db.commit()
    db.refresh(row)
    return row


def update_assignment(db: Session, assignment_id: int, patch: AssignmentUpdate) -> AssignmentRecord:
    row = db.get(AssignmentRecord, assignment_id)
    if not row:
        raise HTTPException(status_code=404, detail="assignment not found")

    data = patch.model_dump(exclude_unset=True)
    if data.get("assignment_date", row.assignment_date) is None:
        raise HTTPException(status_code=422, detail="assignment_date cannot be null")
    for k, v in data.items():
        setattr(row, k, v)

    db.commit()
    db.refresh(row)
    return row


def upsert_assignment(db: Session, dto: AssignmentCreate) -> AssignmentRecord:
    """
    Create-or-update keyed by date. Stored as given: exclusion rules are not
    re-checked here.
    """
    row = get_assignment_by_date(db, dto.assignment_date)
    if row is None:
        return create_assignment(db, dto)
    for k, v in dto.model_dump().items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    logger.debug("updated assignment %s for %s", row.id, row.assignment_date)
    return row


def delete_assignment(db: Session, assignment_id: int) -> None:
    row = db.get(AssignmentRecord, assignment_id)
    if row:
        db.delete(row)
        db.commit()
    return
