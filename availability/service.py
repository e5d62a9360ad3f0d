from __future__ import annotations
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from assignment.models import Slot, SLOTS
from duty_roster.models import DutyRosterEntry
from duty_roster.service import find_prior_day_entry, prior_day
from staff.models import StaffMember, ASSIGNABLE_CATEGORIES

from .exclusions import FormState, exclusions_for, prior_day_team
from .schema import SlotPool, EligibilityResponse


def get_candidate_staff(db: Session) -> List[StaffMember]:
    """Active career-military and contract-labor staff, in directory order."""
    stmt = (
        select(StaffMember)
        .where(
            StaffMember.is_active.is_(True),
            StaffMember.category.in_(ASSIGNABLE_CATEGORIES),
        )
        .order_by(StaffMember.full_name.asc(), StaffMember.id.asc())
    )
    return list(db.scalars(stmt))


def resolve_slot(slot: Slot, candidates: Iterable[str], excluded: set[str]) -> SlotPool:
    # directory order; a name listed twice is offered once
    options = list(dict.fromkeys(name for name in candidates if name not in excluded))
    return SlotPool(
        slot=Slot(slot).value,
        status="available" if options else "no_eligible_staff",
        options=options,
    )


def pools_for_form(
    candidates: Iterable[str],
    form_state: FormState,
    prior_day_entry: Optional[DutyRosterEntry],
) -> list[SlotPool]:
    names = list(candidates)
    team = prior_day_team(prior_day_entry)
    return [
        resolve_slot(slot, names, exclusions_for(slot, form_state, duty_team=team))
        for slot in SLOTS
    ]


def compute_pools(db: Session, *, assignment_date: date, form_state: FormState) -> EligibilityResponse:
    entry = find_prior_day_entry(db, assignment_date)
    candidates = [s.full_name for s in get_candidate_staff(db)]
    prev = prior_day(assignment_date)
    return EligibilityResponse(
        assignment_date=assignment_date,
        prior_day=prev,
        roster_found=entry is not None,
        excluded_duty_team=sorted(prior_day_team(entry)),
        message=None if entry is not None else f"no duty roster found for {prev.isoformat()}",
        pools=pools_for_form(candidates, form_state, entry),
    )
