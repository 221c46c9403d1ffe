"""Reminder schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReminderCreate(BaseModel):
    """Payload for creating a reminder."""

    medicine_id: int | None = None
    reminder_time: str | None = None


class ReminderUpdate(BaseModel):
    """Mutable reminder fields."""

    reminder_time: str | None = None
    enabled: bool | None = None


class ReminderRead(BaseModel):
    """Serialized reminder."""

    id: int
    medicine_id: int
    user_id: int
    reminder_time: str
    enabled: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReminderView(ReminderRead):
    """Reminder joined with medicine display fields."""

    medicine_name: str
    dosage: str
