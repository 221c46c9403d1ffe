"""Dose tracking: marking schedule entries taken and appending history."""
from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.errors import ValidationError
from medtracker.models.medicine import Medicine
from medtracker.models.medicine_history import HistoryStatus, MedicineHistory
from medtracker.models.schedule import Schedule

logger = logging.getLogger(__name__)


def _history_record(
    *,
    medicine_id: int,
    user_id: int,
    status: str,
    notes: str | None,
    taken_at: datetime,
) -> MedicineHistory:
    return MedicineHistory(
        medicine_id=medicine_id,
        user_id=user_id,
        taken_at=taken_at,
        status=status,
        notes=notes,
    )


async def mark_taken(
    session: AsyncSession,
    *,
    schedule_id: int,
    user_id: int,
) -> bool:
    """Mark a schedule entry taken and append a ``taken`` history record.

    Returns ``False`` when the entry does not exist, belongs to another user,
    or has already been taken; in each case nothing is written. The update
    and the history insert commit together or not at all.
    """
    lookup = (
        select(Schedule.medicine_id)
        .join(Medicine, Schedule.medicine_id == Medicine.id)
        .where(
            Schedule.id == schedule_id,
            Medicine.user_id == user_id,
            Schedule.taken.is_(False),
        )
    )
    medicine_id = (await session.execute(lookup)).scalar_one_or_none()
    if medicine_id is None:
        logger.warning(
            "Schedule %s not found, not owned by user %s, or already taken",
            schedule_id,
            user_id,
        )
        return False

    now = datetime.now(UTC)
    try:
        result = await session.execute(
            update(Schedule)
            .where(Schedule.id == schedule_id, Schedule.taken.is_(False))
            .values(taken=True, taken_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            # lost a race with a concurrent mark
            await session.rollback()
            return False
        session.add(
            _history_record(
                medicine_id=medicine_id,
                user_id=user_id,
                status=HistoryStatus.TAKEN.value,
                notes=None,
                taken_at=now,
            )
        )
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to mark schedule %s as taken", schedule_id)
        raise
    logger.info("Schedule %s marked taken by user %s", schedule_id, user_id)
    return True


async def record_history(
    session: AsyncSession,
    *,
    medicine_id: int,
    user_id: int,
    status: str | None = HistoryStatus.TAKEN.value,
    notes: str | None = None,
) -> MedicineHistory:
    """Append a history record that is not tied to a schedule entry.

    Medicine ownership must already have been checked by the caller.
    """
    if status is None or not status.strip():
        raise ValidationError.missing_fields(["status"])
    record = _history_record(
        medicine_id=medicine_id,
        user_id=user_id,
        status=status.strip(),
        notes=notes,
        taken_at=datetime.now(UTC),
    )
    session.add(record)
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to record history for medicine %s", medicine_id)
        raise
    await session.refresh(record)
    return record
