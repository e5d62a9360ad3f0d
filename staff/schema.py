from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional

from .models import StaffCategory


class StaffSchema(BaseModel):
    id: int
    full_name: str
    category: StaffCategory
    is_active: bool
    model_config = ConfigDict(from_attributes=True)


class StaffCreate(BaseModel):
    full_name: str
    category: StaffCategory = StaffCategory.other
    is_active: bool = True
    model_config = ConfigDict(extra="forbid")

    @field_validator("full_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name must not be blank")
        return v


class StaffUpdate(BaseModel):
    full_name: Optional[str] = None
    category: Optional[StaffCategory] = None
    is_active: Optional[bool] = None
