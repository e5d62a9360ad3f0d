from __future__ import annotations
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from availability.schema import ResolvedName


class DutyRosterSchema(BaseModel):
    id: int
    duty_date: date
    doctor: Optional[str] = None
    resident: Optional[str] = None
    postgraduate: Optional[str] = None
    nurse: Optional[str] = None
    assistant_nurse: Optional[str] = None
    note: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class DutyRosterCreate(BaseModel):
    duty_date: date
    doctor: Optional[str] = None
    resident: Optional[str] = None
    postgraduate: Optional[str] = None
    nurse: Optional[str] = None
    assistant_nurse: Optional[str] = None
    note: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class DutyRosterUpdate(BaseModel):
    duty_date: Optional[date] = None
    doctor: Optional[str] = None
    resident: Optional[str] = None
    postgraduate: Optional[str] = None
    nurse: Optional[str] = None
    assistant_nurse: Optional[str] = None
    note: Optional[str] = None


class DutyRosterResolved(BaseModel):
    id: int
    duty_date: date
    doctor: list[ResolvedName]
    resident: list[ResolvedName]
    postgraduate: list[ResolvedName]
    nurse: list[ResolvedName]
    assistant_nurse: list[ResolvedName]
