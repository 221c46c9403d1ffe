"""Dose history and adherence statistics schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from medtracker.models.medicine_history import HistoryStatus


class HistoryRecordCreate(BaseModel):
    """Payload for recording a dose event outside of a schedule entry."""

    status: str = HistoryStatus.TAKEN.value
    notes: str | None = None


class HistoryRead(BaseModel):
    """Serialized history record."""

    id: int
    medicine_id: int
    user_id: int
    taken_at: datetime
    status: str
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)


class HistoryView(HistoryRead):
    """History record joined with medicine display fields."""

    medicine_name: str
    dosage: str


class HistoryFilters(BaseModel):
    """Optional, conjunctive filters for history queries."""

    date_from: date | None = None
    date_to: date | None = None
    medicine_id: int | None = None


class AdherenceStatistics(BaseModel):
    """Per-user adherence summary."""

    total_medicines: int
    total_doses_taken: int
    total_doses_missed: int
    adherence_rate: float
