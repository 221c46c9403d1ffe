"""ORM models package export."""

from medtracker.models.medicine import Frequency, Medicine
from medtracker.models.medicine_history import HistoryStatus, MedicineHistory
from medtracker.models.reminder import Reminder
from medtracker.models.schedule import Schedule
from medtracker.models.user import User

__all__ = [
    "Frequency",
    "HistoryStatus",
    "Medicine",
    "MedicineHistory",
    "Reminder",
    "Schedule",
    "User",
]
