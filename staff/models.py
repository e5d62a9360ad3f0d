from __future__ import annotations
from enum import Enum
from sqlalchemy import Boolean, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base


class StaffCategory(str, Enum):
    officer = "officer"
    career_military = "career_military"
    contract_labor = "contract_labor"
    other = "other"


# only these categories take part in room/task assignment
ASSIGNABLE_CATEGORIES = (StaffCategory.career_military, StaffCategory.contract_labor)


class StaffMember(Base):
    __tablename__ = "staff_members"

    id: Mapped[int] = mapped_column(primary_key=True)

    # free text, used as the matching key by rosters and assignment slots
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    category: Mapped[StaffCategory] = mapped_column(
        SAEnum(StaffCategory, name="staff_category"),
        default=StaffCategory.other,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
