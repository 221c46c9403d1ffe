"""Medicine model and dosing frequencies."""
from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from medtracker.db.base import Base
from medtracker.models.mixins import TimestampMixin


class Frequency(str, enum.Enum):
    """Known dosing cadences that drive schedule generation."""

    DAILY = "daily"
    TWICE_DAILY = "twice-daily"
    THREE_TIMES_DAILY = "three-times-daily"
    WEEKLY = "weekly"
    AS_NEEDED = "as-needed"


class Medicine(TimestampMixin, Base):
    """A medicine a user is taking.

    ``frequency`` is stored as plain text: values outside :class:`Frequency`
    are kept as entered and simply produce no schedule entries. ``active`` is
    cleared on deletion; rows are never removed so history stays joinable.
    """

    __tablename__ = "medicines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str] = mapped_column(String(120), nullable=False)
    frequency: Mapped[str] = mapped_column(String(64), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
