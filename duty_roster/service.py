from __future__ import annotations
import logging
from calendar import monthrange
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import DutyRosterEntry
from .schema import DutyRosterCreate, DutyRosterUpdate

logger = logging.getLogger(__name__)


# -------- helpers --------

def _month_bounds(month: int, year: int) -> tuple[date, date]:
    # inclusive: [first day, last day]; stays inside date.max for December 9999
    if not 1 <= month <= 12:
        raise HTTPException(status_code=422, detail="month must be between 1 and 12")
    try:
        start = date(year, month, 1)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"year must be between {MINYEAR} and {MAXYEAR}")
    return start, date(year, month, monthrange(year, month)[1])


def parse_target_date(value: str | date) -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string; ValueError on anything else."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def prior_day(target_date: date) -> date:
    return target_date - timedelta(days=1)


# -------- queries --------

def get_duty_rosters(
    db: Session,
    *,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> List[DutyRosterEntry]:
    """List entries ordered by date; filter by month+year, or by year alone."""
    stmt = select(DutyRosterEntry)
    if month is not None and year is not None:
        first, last = _month_bounds(month, year)
        stmt = stmt.where(DutyRosterEntry.duty_date >= first, DutyRosterEntry.duty_date <= last)
    elif year is not None:
        first, _ = _month_bounds(1, year)
        _, last = _month_bounds(12, year)
        stmt = stmt.where(DutyRosterEntry.duty_date >= first, DutyRosterEntry.duty_date <= last)
    stmt = stmt.order_by(DutyRosterEntry.duty_date.asc())
    return list(db.scalars(stmt))


def get_duty_roster(db: Session, roster_id: int) -> DutyRosterEntry | None:
    return db.get(DutyRosterEntry, roster_id)


def get_duty_roster_by_date(db: Session, duty_date: date) -> DutyRosterEntry | None:
    stmt = select(DutyRosterEntry).where(DutyRosterEntry.duty_date == duty_date)
    return db.scalars(stmt).first()


def find_prior_day_entry(db: Session, target_date: date) -> DutyRosterEntry | None:
    """
    Roster of the day before target_date.
    Loads the whole month of that day and picks the exact date; None is a
    normal outcome, not an error.
    """
    prev = prior_day(target_date)
    rows = get_duty_rosters(db, month=prev.month, year=prev.year)
    found = next((r for r in rows if r.duty_date == prev), None)
    if found is None:
        logger.info("no duty roster for %s (prior day of %s)", prev, target_date)
    return found


# -------- mutations --------

def create_duty_roster(db: Session, dto: DutyRosterCreate) -> DutyRosterEntry:
    row = DutyRosterEntry(**dto.model_dump())
    db.add(row)
    # Let IntegrityError bubble; router maps to 409 on duplicate date
    db.commit()
    db.refresh(row)
    return row


def bulk_create_duty_rosters(db: Session, dtos: list[DutyRosterCreate]) -> List[DutyRosterEntry]:
    rows = [DutyRosterEntry(**dto.model_dump()) for dto in dtos]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def update_duty_roster(db: Session, roster_id: int, patch: DutyRosterUpdate) -> DutyRosterEntry:
    row = db.get(DutyRosterEntry, roster_id)
    if not row:
        raise HTTPException(status_code=404, detail="duty roster not found")

    data = patch.model_dump(exclude_unset=True)
    if data.get("duty_date", row.duty_date) is None:
        raise HTTPException(status_code=422, detail="duty_date cannot be null")
    for k, v in data.items():
        setattr(row, k, v)

    db.commit()
    db.refresh(row)
    return row


def delete_duty_roster(db: Session, roster_id: int) -> bool:
    row = db.get(DutyRosterEntry, roster_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True
