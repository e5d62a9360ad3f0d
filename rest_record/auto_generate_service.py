from __future__ import annotations
import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from availability.names import split_names, match_staff
from duty_roster.service import find_prior_day_entry, prior_day
from staff.service import fetch_active_staff

from .models import RestCategory
from .schema import RestRecordCreate
from .service import check_rest_record_exists, create_rest_record

logger = logging.getLogger(__name__)


class RestGenerationError(Exception):
    """A row of the batch failed; nothing from the batch was kept."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"could not create rest record for {name!r}")
        self.name = name
        self.cause = cause


def _nothing(target_date: date, source_date: date, message: str) -> dict:
    logger.info("auto-generate for %s: %s", target_date, message)
    return {
        "status": "nothing_to_generate",
        "target_date": target_date,
        "source_date": source_date,
        "created": 0,
        "skipped": 0,
        "unmatched": [],
        "message": message,
    }


# ---------- public API ----------
def auto_generate(db: Session, *, target_date: date) -> dict:
    """
    Create 'on duty rest' records on target_date for every nurse of the
    previous day's roster.
    - names are matched case-insensitively against active staff
    - a matched nurse who already rests on target_date is skipped
    - an unmatched name is still stored, without staff reference
    All rows go in one transaction: any failure rolls back the batch and
    raises RestGenerationError with the offending name.
    """
    source_date = prior_day(target_date)
    entry = find_prior_day_entry(db, target_date)
    if entry is None:
        return _nothing(target_date, source_date, f"no duty roster found for {source_date.isoformat()}")

    nurse_names = split_names(entry.nurse)
    if not nurse_names:
        return _nothing(target_date, source_date, f"no nurse on the duty roster of {source_date.isoformat()}")

    staff = fetch_active_staff(db)
    result = {
        "status": "created",
        "target_date": target_date,
        "source_date": source_date,
        "created": 0,
        "skipped": 0,
        "unmatched": [],
    }

    current = None
    try:
        for name in nurse_names:
            current = name
            member = match_staff(name, staff, case_sensitive=False)
            if member is not None:
                if check_rest_record_exists(db, member.id, target_date):
                    result["skipped"] += 1
                    continue
                dto = RestRecordCreate(
                    staff_id=member.id,
                    full_name=member.full_name,
                    category=RestCategory.on_duty_rest,
                    rest_date=target_date,
                    note=f"Generated from duty roster of {source_date.isoformat()}",
                )
            else:
                dto = RestRecordCreate(
                    staff_id=None,
                    full_name=name,
                    category=RestCategory.on_duty_rest,
                    rest_date=target_date,
                    note="Generated from duty roster (name not found in staff directory)",
                )
                result["unmatched"].append(name)
            create_rest_record(db, dto, commit=False)
            result["created"] += 1
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("auto-generate for %s failed on %r: %s", target_date, current, e)
        raise RestGenerationError(current, e) from e

    if result["unmatched"]:
        logger.warning("auto-generate for %s: no directory match for %s", target_date, result["unmatched"])
    result["message"] = f"created {result['created']} rest records"
    logger.info(
        "auto-generate for %s: created=%d skipped=%d",
        target_date, result["created"], result["skipped"],
    )
    return result
