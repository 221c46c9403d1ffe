"""Schema exports."""

from medtracker.schemas.auth import (
    LoginRequest,
    RegistrationRequest,
    RegistrationResponse,
    Token,
)
from medtracker.schemas.common import MessageResponse
from medtracker.schemas.history import (
    AdherenceStatistics,
    HistoryFilters,
    HistoryRead,
    HistoryRecordCreate,
    HistoryView,
)
from medtracker.schemas.medicine import MedicineCreate, MedicineRead, MedicineUpdate
from medtracker.schemas.reminder import (
    ReminderCreate,
    ReminderRead,
    ReminderUpdate,
    ReminderView,
)
from medtracker.schemas.schedule import ScheduleCreate, ScheduleRead, ScheduleView
from medtracker.schemas.user import UserRead

__all__ = [
    "AdherenceStatistics",
    "HistoryFilters",
    "HistoryRead",
    "HistoryRecordCreate",
    "HistoryView",
    "LoginRequest",
    "MedicineCreate",
    "MedicineRead",
    "MedicineUpdate",
    "MessageResponse",
    "RegistrationRequest",
    "RegistrationResponse",
    "ReminderCreate",
    "ReminderRead",
    "ReminderUpdate",
    "ReminderView",
    "ScheduleCreate",
    "ScheduleRead",
    "ScheduleView",
    "Token",
    "UserRead",
]
