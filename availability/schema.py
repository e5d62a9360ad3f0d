from __future__ import annotations
from datetime import date
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class StaffReference(BaseModel):
    kind: Literal["staff"] = "staff"
    staff_id: int
    full_name: str


class UnresolvedName(BaseModel):
    kind: Literal["unresolved"] = "unresolved"
    name: str


ResolvedName = Annotated[Union[StaffReference, UnresolvedName], Field(discriminator="kind")]


class SlotPool(BaseModel):
    slot: str
    status: Literal["available", "no_eligible_staff"]
    options: list[str]


# PUBLIC payload: the draft as currently edited by the client
class EligibilityRequest(BaseModel):
    assignment_date: date
    room_1: Optional[str] = None
    room_2: Optional[str] = None
    room_3: Optional[str] = None
    room_4: Optional[str] = None
    outside_run: Optional[str] = None
    imaging: Optional[str] = None
    data_entry: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class EligibilityResponse(BaseModel):
    assignment_date: date
    prior_day: date
    roster_found: bool
    excluded_duty_team: list[str]
    message: Optional[str] = None
    pools: list[SlotPool]
