from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from availability.schema import ResolvedName


class AssignmentSchema(BaseModel):
    id: int
    assignment_date: date
    room_1: Optional[str] = None
    room_2: Optional[str] = None
    room_3: Optional[str] = None
    room_4: Optional[str] = None
    outside_run: Optional[str] = None
    imaging: Optional[str] = None
    data_entry: Optional[str] = None
    note: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class AssignmentCreate(BaseModel):
    assignment_date: date
    room_1: Optional[str] = None
    room_2: Optional[str] = None
    room_3: Optional[str] = None
    room_4: Optional[str] = None
    outside_run: Optional[str] = None
    imaging: Optional[str] = None
    data_entry: Optional[str] = None
    note: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class AssignmentUpdate(BaseModel):
    assignment_date: Optional[date] = None
    room_1: Optional[str] = None
    room_2: Optional[str] = None
    room_3: Optional[str] = None
    room_4: Optional[str] = None
    outside_run: Optional[str] = None
    imaging: Optional[str] = None
    data_entry: Optional[str] = None
    note: Optional[str] = None


class AssignmentPage(BaseModel):
    items: list[AssignmentSchema]
    total_count: int
    page: int
    page_size: int


class AssignmentResolved(BaseModel):
    id: int
    assignment_date: date
    slots: dict[str, list[ResolvedName]]
