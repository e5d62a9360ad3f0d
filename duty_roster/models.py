from __future__ import annotations
from datetime import date
from sqlalchemy import Date, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base


# role columns, each a delimited list of staff names
DUTY_ROLE_FIELDS = ("doctor", "resident", "postgraduate", "nurse", "assistant_nurse")


class DutyRosterEntry(Base):
    __tablename__ = "duty_rosters"

    id: Mapped[int] = mapped_column(primary_key=True)
    duty_date: Mapped[date] = mapped_column(Date(), nullable=False, index=True)

    doctor:          Mapped[str | None] = mapped_column(Text(), nullable=True)
    resident:        Mapped[str | None] = mapped_column(Text(), nullable=True)
    postgraduate:    Mapped[str | None] = mapped_column(Text(), nullable=True)
    nurse:           Mapped[str | None] = mapped_column(Text(), nullable=True)
    assistant_nurse: Mapped[str | None] = mapped_column(Text(), nullable=True)

    note: Mapped[str | None] = mapped_column(Text(), nullable=True)

    __table_args__ = (
        UniqueConstraint("duty_date", name="uq_duty_roster_date"),
    )
