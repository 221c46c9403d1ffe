"""Append-only dose history model."""
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from medtracker.db.base import Base
from medtracker.models.mixins import TimestampMixin


class HistoryStatus(str, enum.Enum):
    """Statuses the adherence statistics know about."""

    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"


class MedicineHistory(TimestampMixin, Base):
    """Immutable audit record of a dose event."""

    __tablename__ = "medicine_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    medicine_id: Mapped[int] = mapped_column(
        ForeignKey("medicines.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    taken_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=HistoryStatus.TAKEN.value
    )
    notes: Mapped[str | None] = mapped_column(Text)
