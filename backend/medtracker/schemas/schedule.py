"""Schedule schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class ScheduleCreate(BaseModel):
    """Payload for a manually added schedule entry."""

    medicine_id: int | None = None
    scheduled_time: str | None = None
    scheduled_date: date | None = None


class ScheduleRead(BaseModel):
    """Serialized schedule entry."""

    id: int
    medicine_id: int
    scheduled_time: str
    scheduled_date: date
    taken: bool
    taken_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScheduleView(ScheduleRead):
    """Schedule entry joined with the medicine it belongs to."""

    medicine_name: str
    dosage: str
    frequency: str
