"""Schedule generation and schedule queries.

Schedules are expanded once, eagerly, when a medicine is created: each
frequency maps to a fixed set of clock times for the current (UTC) day.
There is no recurrence engine; "today's schedule" is a date-equality filter
over stored rows.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, date, datetime

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.errors import ValidationError
from medtracker.models.medicine import Frequency, Medicine
from medtracker.models.schedule import Schedule
from medtracker.schemas.schedule import ScheduleView

logger = logging.getLogger(__name__)

_FREQUENCY_TIMES: dict[Frequency, tuple[str, ...]] = {
    Frequency.DAILY: ("09:00",),
    Frequency.TWICE_DAILY: ("09:00", "18:00"),
    Frequency.THREE_TIMES_DAILY: ("08:00", "14:00", "20:00"),
    Frequency.WEEKLY: ("09:00",),
    Frequency.AS_NEEDED: (),
}

_CLOCK_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def today_utc() -> date:
    """Return the current calendar date in UTC."""
    return datetime.now(UTC).date()


def validate_clock_time(value: str | None, *, field: str = "scheduled_time") -> str:
    """Return ``value`` stripped, or raise if it is not a 24h ``HH:MM`` time."""
    if value is None or not value.strip():
        raise ValidationError.missing_fields([field])
    candidate = value.strip()
    if not _CLOCK_TIME.match(candidate):
        raise ValidationError(f"Invalid {field}: expected HH:MM")
    return candidate


def times_for_frequency(
    frequency: str, start_date: date | None, today: date
) -> list[str]:
    """Map a frequency to the clock times it generates for ``today``.

    Unknown frequencies yield no times. Weekly medicines get a dose today only
    once their start date has been reached.
    """
    try:
        known = Frequency(frequency)
    except ValueError:
        return []
    if known is Frequency.WEEKLY and (start_date is None or start_date > today):
        return []
    return list(_FREQUENCY_TIMES[known])


async def generate_schedules(
    session: AsyncSession,
    *,
    medicine_id: int,
    frequency: str,
    start_date: date | None,
    today: date | None = None,
) -> list[Schedule]:
    """Add today's schedule entries for a medicine to the current unit of work.

    The caller owns the transaction: rows are flushed so they receive ids but
    are not committed here.
    """
    target_date = today or today_utc()
    try:
        Frequency(frequency)
    except ValueError:
        logger.warning(
            "Unknown frequency %r for medicine %s; no schedules generated",
            frequency,
            medicine_id,
        )
        return []

    schedules = [
        Schedule(
            medicine_id=medicine_id,
            scheduled_time=scheduled_time,
            scheduled_date=target_date,
            taken=False,
        )
        for scheduled_time in times_for_frequency(frequency, start_date, target_date)
    ]
    if schedules:
        session.add_all(schedules)
        await session.flush()
    logger.debug(
        "Generated %d schedule(s) for medicine %s on %s",
        len(schedules),
        medicine_id,
        target_date,
    )
    return schedules


async def create_ad_hoc_schedule(
    session: AsyncSession,
    *,
    medicine_id: int,
    scheduled_time: str | None,
    scheduled_date: date | None = None,
) -> Schedule:
    """Persist a manually added schedule entry, defaulting to today."""
    clock_time = validate_clock_time(scheduled_time)
    schedule = Schedule(
        medicine_id=medicine_id,
        scheduled_time=clock_time,
        scheduled_date=scheduled_date or today_utc(),
        taken=False,
    )
    session.add(schedule)
    await session.commit()
    await session.refresh(schedule)
    return schedule


def _schedule_view_stmt(user_id: int) -> Select:
    return (
        select(Schedule, Medicine.name, Medicine.dosage, Medicine.frequency)
        .join(Medicine, Schedule.medicine_id == Medicine.id)
        .where(Medicine.user_id == user_id, Medicine.active.is_(True))
    )


def _to_views(rows) -> list[ScheduleView]:
    views: list[ScheduleView] = []
    for schedule, medicine_name, dosage, frequency in rows:
        views.append(
            ScheduleView(
                id=schedule.id,
                medicine_id=schedule.medicine_id,
                scheduled_time=schedule.scheduled_time,
                scheduled_date=schedule.scheduled_date,
                taken=schedule.taken,
                taken_at=schedule.taken_at,
                created_at=schedule.created_at,
                medicine_name=medicine_name,
                dosage=dosage,
                frequency=frequency,
            )
        )
    return views


async def list_schedules(session: AsyncSession, *, user_id: int) -> list[ScheduleView]:
    """Return every schedule entry of the user's active medicines."""
    stmt = _schedule_view_stmt(user_id).order_by(
        Schedule.scheduled_date.desc(), Schedule.scheduled_time.asc(), Schedule.id
    )
    result = await session.execute(stmt)
    return _to_views(result.all())


async def list_todays_schedule(
    session: AsyncSession,
    *,
    user_id: int,
    today: date | None = None,
) -> list[ScheduleView]:
    """Return the user's schedule entries dated ``today``, earliest first."""
    stmt = (
        _schedule_view_stmt(user_id)
        .where(Schedule.scheduled_date == (today or today_utc()))
        .order_by(Schedule.scheduled_time.asc(), Schedule.id)
    )
    result = await session.execute(stmt)
    return _to_views(result.all())
