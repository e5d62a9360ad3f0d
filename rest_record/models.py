from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from sqlalchemy import Date, DateTime, String, Text, ForeignKey, Enum as SAEnum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base


class RestCategory(str, Enum):
    on_duty_rest = "on_duty_rest"
    business_trip = "business_trip"
    reinforcement = "reinforcement"
    training = "training"
    other = "other"


class RestRecord(Base):
    __tablename__ = "rest_records"

    id: Mapped[int] = mapped_column(primary_key=True)

    # null when the name did not match anyone in the directory
    staff_id: Mapped[int | None] = mapped_column(
        ForeignKey("staff_members.id", ondelete="SET NULL"), index=True, nullable=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)

    category: Mapped[RestCategory] = mapped_column(
        SAEnum(RestCategory, name="rest_category"),
        default=RestCategory.on_duty_rest,
        nullable=False,
    )
    rest_date: Mapped[date] = mapped_column(Date(), nullable=False, index=True)
    note: Mapped[str | None] = mapped_column(Text(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    staff = relationship("StaffMember")
