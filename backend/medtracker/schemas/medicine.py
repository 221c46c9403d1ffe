"""Medicine schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class MedicineCreate(BaseModel):
    """Payload for registering a medicine.

    Required fields are declared optional here so that the registry can
    report every missing field at once instead of failing on the first one.
    """

    name: str | None = None
    dosage: str | None = None
    frequency: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None


class MedicineUpdate(BaseModel):
    """Mutable medicine fields; only the ones provided are applied."""

    name: str | None = None
    dosage: str | None = None
    frequency: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None


class MedicineRead(BaseModel):
    """Serialized medicine."""

    id: int
    user_id: int
    name: str
    dosage: str
    frequency: str
    start_date: date
    end_date: date | None = None
    notes: str | None = None
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
