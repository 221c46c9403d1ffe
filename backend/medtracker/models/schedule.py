"""Schedule entry model."""
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from medtracker.db.base import Base
from medtracker.models.mixins import TimestampMixin


class Schedule(TimestampMixin, Base):
    """A single dated, timed expectation that a dose be taken.

    Ownership is inherited from the medicine; there is no ``user_id`` column.
    """

    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    medicine_id: Mapped[int] = mapped_column(
        ForeignKey("medicines.id"), nullable=False, index=True
    )
    scheduled_time: Mapped[str] = mapped_column(String(5), nullable=False)
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    taken: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    taken_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
