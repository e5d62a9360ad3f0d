from __future__ import annotations
import logging
from datetime import date
from enum import Enum
from functools import partial
from typing import Any, Callable, Iterable, Optional, TypeVar

from sqlalchemy.orm import Session

from availability.names import join_names
from availability.schema import SlotPool
from availability.service import get_candidate_staff, pools_for_form
from core.inflight import ActionToken, InFlightRegistry
from duty_roster.models import DutyRosterEntry
from duty_roster.service import find_prior_day_entry

from .models import Slot, SLOTS
from .schema import AssignmentCreate

logger = logging.getLogger(__name__)

T = TypeVar("T")
RosterLookup = Callable[[date], Optional[DutyRosterEntry]]

ROSTER_LOOKUP = "roster-lookup"
SUBMIT = "assignment-submit"


class DraftState(str, Enum):
    empty = "empty"
    editing = "editing"
    valid_for_submit = "valid_for_submit"


class DraftStateError(Exception):
    pass


class AssignmentDraft:
    """
    In-memory daily assignment being edited by one session.

    Every read of the pools is computed from the current slots and the
    prior-day roster, so a later slot always reflects the latest selections
    of the slots before it. Roster lookups and submits carry tokens: a
    lookup superseded by a newer date change, or finishing after close(),
    is dropped.
    """

    def __init__(
        self,
        candidates: Iterable[str],
        roster_lookup: RosterLookup,
        *,
        registry: Optional[InFlightRegistry] = None,
    ):
        self._candidates = list(candidates)
        self._lookup = roster_lookup
        self._registry = registry or InFlightRegistry()
        self._prior_entry: Optional[DutyRosterEntry] = None
        self._closed = False

        self.state = DraftState.empty
        self.record_id: Optional[int] = None
        self.assignment_date: Optional[date] = None
        self.note: Optional[str] = None
        self.slots: dict[str, Optional[str]] = {s.value: None for s in SLOTS}

    @classmethod
    def for_session(cls, db: Session, **kwargs) -> "AssignmentDraft":
        candidates = [s.full_name for s in get_candidate_staff(db)]
        return cls(candidates, partial(find_prior_day_entry, db), **kwargs)

    # ---------- state ----------

    def _require_open(self) -> None:
        if self._closed:
            raise DraftStateError("draft is closed")

    def _require_started(self) -> None:
        self._require_open()
        if self.state == DraftState.empty:
            raise DraftStateError("start or load a draft first")

    def _refresh_state(self) -> None:
        self.state = DraftState.valid_for_submit if self.assignment_date else DraftState.editing

    @property
    def _key(self) -> int:
        return id(self)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def prior_day_entry(self) -> Optional[DutyRosterEntry]:
        return self._prior_entry

    @property
    def roster_found(self) -> bool:
        return self._prior_entry is not None

    def start_new(self, assignment_date: Optional[date] = None) -> None:
        self._require_open()
        self.record_id = None
        self.note = None
        self.slots = {s.value: None for s in SLOTS}
        self.assignment_date = None
        self._prior_entry = None
        self._refresh_state()
        if assignment_date is not None:
            self.set_date(assignment_date)

    def load(self, record: Any) -> None:
        """Load an existing AssignmentRecord (or anything with the same attributes)."""
        self._require_open()
        self.record_id = getattr(record, "id", None)
        self.note = getattr(record, "note", None)
        self.slots = {s.value: getattr(record, s.value, None) for s in SLOTS}
        self.assignment_date = None
        self._prior_entry = None
        self._refresh_state()
        self.set_date(record.assignment_date)

    def close(self) -> None:
        """End the session; pending lookups and submits become no-ops."""
        self._closed = True
        self._registry.supersede(ROSTER_LOOKUP, self._key)
        self._registry.supersede(SUBMIT, self._key)

    # ---------- edits ----------

    def set_date(self, assignment_date: Optional[date]) -> None:
        """
        Switch the draft to another date and load that date's prior-day roster.
        A failed lookup leaves date and roster as they were; the same date
        is looked up again while no roster is loaded.
        """
        self._require_started()
        if assignment_date == self.assignment_date and (self.roster_found or assignment_date is None):
            return
        previous_date, previous_entry = self.assignment_date, self._prior_entry
        token = self.begin_roster_lookup()
        try:
            entry = self._lookup(assignment_date) if assignment_date else None
        except Exception:
            self._registry.release(token)
            self._prior_entry = previous_entry
            raise
        self.assignment_date = assignment_date
        self._refresh_state()
        if not self.apply_roster_lookup(token, entry):
            self._prior_entry = previous_entry
            self.assignment_date = previous_date
            self._refresh_state()

    def begin_roster_lookup(self) -> ActionToken:
        """Start a lookup for the current date, superseding any pending one."""
        self._require_started()
        self._registry.supersede(ROSTER_LOOKUP, self._key)
        self._prior_entry = None
        return self._registry.claim(ROSTER_LOOKUP, self._key)

    def apply_roster_lookup(self, token: ActionToken, entry: Optional[DutyRosterEntry]) -> bool:
        if self._closed or not self._registry.is_current(token):
            logger.debug("dropping stale roster lookup %s", token.id)
            return False
        self._prior_entry = entry
        self._registry.release(token)
        return True

    def set_slot(self, slot: Slot | str, names: Optional[str | Iterable[str]]) -> None:
        self._require_started()
        slot = Slot(slot)
        if names is None:
            self.slots[slot.value] = None
            return
        text = join_names(names) if not isinstance(names, str) else names
        self.slots[slot.value] = text or None

    # ---------- eligibility ----------

    def pools(self) -> list[SlotPool]:
        return pools_for_form(self._candidates, self.slots, self._prior_entry)

    def pool_for(self, slot: Slot | str) -> SlotPool:
        slot = Slot(slot)
        return next(p for p in self.pools() if p.slot == slot.value)

    # ---------- submit ----------

    def to_payload(self) -> AssignmentCreate:
        if self.state != DraftState.valid_for_submit:
            raise DraftStateError("an assignment date is required before submitting")
        return AssignmentCreate(assignment_date=self.assignment_date, note=self.note, **self.slots)

    def submit(self, writer: Callable[[AssignmentCreate], T]) -> Optional[T]:
        """
        Hand the draft to the storage writer. A second submit while one is in
        flight raises ActionInProgress. Returns None if the draft was closed
        while the write was running.
        """
        self._require_open()
        payload = self.to_payload()
        token = self._registry.claim(SUBMIT, self._key)
        try:
            result = writer(payload)
        finally:
            self._registry.release(token)
        if self._closed or token.cancelled:
            return None
        self.record_id = getattr(result, "id", self.record_id)
        return result
