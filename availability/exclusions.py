from __future__ import annotations
from typing import Mapping, Optional

from assignment.models import Slot
from duty_roster.models import DutyRosterEntry, DUTY_ROLE_FIELDS

from .names import split_names

# Slots whose selections are hidden from a given slot on the same form.
# Rooms and outside-run form one chain; data-entry has its own two-slot list;
# imaging depends on nothing.
SLOT_PREDECESSORS: dict[Slot, tuple[Slot, ...]] = {
    Slot.room_1: (),
    Slot.room_2: (Slot.room_1,),
    Slot.room_3: (Slot.room_1, Slot.room_2),
    Slot.room_4: (Slot.room_1, Slot.room_2, Slot.room_3),
    Slot.outside_run: (Slot.room_1, Slot.room_2, Slot.room_3, Slot.room_4),
    Slot.imaging: (),
    Slot.data_entry: (Slot.imaging, Slot.outside_run),
}

FormState = Mapping[str, Optional[str]]


def prior_day_team(entry: Optional[DutyRosterEntry]) -> set[str]:
    """Everyone on any role of the previous day's roster; empty without a roster."""
    if entry is None:
        return set()
    team: set[str] = set()
    for field in DUTY_ROLE_FIELDS:
        team.update(split_names(getattr(entry, field)))
    return team


def prior_selections(slot: Slot, form_state: FormState) -> set[str]:
    chosen: set[str] = set()
    for earlier in SLOT_PREDECESSORS[Slot(slot)]:
        chosen.update(split_names(form_state.get(earlier.value)))
    return chosen


def exclusions_for(
    slot: Slot,
    form_state: FormState,
    prior_day_entry: Optional[DutyRosterEntry] = None,
    *,
    duty_team: Optional[set[str]] = None,
) -> set[str]:
    """
    Names that must not be offered for `slot`.
    Pass `duty_team` when it was already computed for the form to avoid
    re-splitting the roster for each slot.
    """
    team = duty_team if duty_team is not None else prior_day_team(prior_day_entry)
    return team | prior_selections(slot, form_state)
