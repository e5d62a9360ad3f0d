from __future__ import annotations
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import RestCategory


class RestRecordSchema(BaseModel):
    id: int
    staff_id: Optional[int] = None
    full_name: str
    category: RestCategory
    rest_date: date
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload (what clients send); name is taken from the directory when staff_id is given
class RestRecordCreatePayload(BaseModel):
    staff_id: Optional[int] = None
    full_name: Optional[str] = None
    category: RestCategory = RestCategory.on_duty_rest
    rest_date: date
    note: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def needs_someone(self):
        if self.staff_id is None and not (self.full_name and self.full_name.strip()):
            raise ValueError("either staff_id or full_name is required")
        return self


# INTERNAL DTO for the service
class RestRecordCreate(BaseModel):
    staff_id: Optional[int] = None
    full_name: str
    category: RestCategory = RestCategory.on_duty_rest
    rest_date: date
    note: Optional[str] = None


class RestRecordUpdate(BaseModel):
    staff_id: Optional[int] = None
    full_name: Optional[str] = None
    category: Optional[RestCategory] = None
    rest_date: Optional[date] = None
    note: Optional[str] = None


class RestRecordCopyRequest(BaseModel):
    record_ids: list[int] = Field(..., min_length=1)
    target_date: date


class RestRecordCopyResponse(BaseModel):
    copied: int
    skipped: int
    target_date: date


class AutoGenerateRequest(BaseModel):
    target_date: date


class AutoGenerateResponse(BaseModel):
    status: Literal["created", "nothing_to_generate"]
    target_date: date
    source_date: date
    created: int
    skipped: int
    unmatched: list[str]
    message: str
