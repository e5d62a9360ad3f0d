from __future__ import annotations
from datetime import date
from enum import Enum
from sqlalchemy import Date, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base


class Slot(str, Enum):
    room_1 = "room_1"
    room_2 = "room_2"
    room_3 = "room_3"
    room_4 = "room_4"
    outside_run = "outside_run"
    imaging = "imaging"
    data_entry = "data_entry"


# form order
SLOTS: tuple[Slot, ...] = tuple(Slot)


class AssignmentRecord(Base):
    __tablename__ = "daily_assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    assignment_date: Mapped[date] = mapped_column(Date(), nullable=False, index=True)

    # each slot holds delimited staff names ("A, B")
    room_1:      Mapped[str | None] = mapped_column(Text(), nullable=True)
    room_2:      Mapped[str | None] = mapped_column(Text(), nullable=True)
    room_3:      Mapped[str | None] = mapped_column(Text(), nullable=True)
    room_4:      Mapped[str | None] = mapped_column(Text(), nullable=True)
    outside_run: Mapped[str | None] = mapped_column(Text(), nullable=True)
    imaging:     Mapped[str | None] = mapped_column(Text(), nullable=True)
    data_entry:  Mapped[str | None] = mapped_column(Text(), nullable=True)

    note: Mapped[str | None] = mapped_column(Text(), nullable=True)

    __table_args__ = (
        UniqueConstraint("assignment_date", name="uq_daily_assignment_date"),
    )
