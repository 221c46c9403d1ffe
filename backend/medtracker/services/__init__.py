"""Service layer exports."""
from medtracker.services import (
    adherence_service,
    auth_service,
    dose_service,
    medicine_service,
    reminder_service,
    schedule_service,
    user_service,
)

__all__ = [
    "adherence_service",
    "auth_service",
    "dose_service",
    "medicine_service",
    "reminder_service",
    "schedule_service",
    "user_service",
]
