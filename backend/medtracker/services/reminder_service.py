"""Reminder configuration CRUD."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.errors import ValidationError
from medtracker.models.medicine import Medicine
from medtracker.models.reminder import Reminder
from medtracker.schemas.reminder import ReminderCreate, ReminderUpdate, ReminderView
from medtracker.services.schedule_service import validate_clock_time

logger = logging.getLogger(__name__)


async def list_reminders(session: AsyncSession, *, user_id: int) -> list[ReminderView]:
    """Return enabled reminders on the user's active medicines by time of day."""
    stmt = (
        select(Reminder, Medicine.name, Medicine.dosage)
        .join(Medicine, Reminder.medicine_id == Medicine.id)
        .where(
            Reminder.user_id == user_id,
            Reminder.enabled.is_(True),
            Medicine.active.is_(True),
        )
        .order_by(Reminder.reminder_time.asc(), Reminder.id)
    )
    result = await session.execute(stmt)
    return [
        ReminderView(
            id=reminder.id,
            medicine_id=reminder.medicine_id,
            user_id=reminder.user_id,
            reminder_time=reminder.reminder_time,
            enabled=reminder.enabled,
            created_at=reminder.created_at,
            medicine_name=medicine_name,
            dosage=dosage,
        )
        for reminder, medicine_name, dosage in result.all()
    ]


async def create_reminder(
    session: AsyncSession,
    payload: ReminderCreate,
    *,
    user_id: int,
) -> Reminder:
    """Persist an enabled reminder; the caller has verified medicine ownership."""
    if payload.medicine_id is None:
        raise ValidationError.missing_fields(["medicine_id"])
    reminder = Reminder(
        medicine_id=payload.medicine_id,
        user_id=user_id,
        reminder_time=validate_clock_time(payload.reminder_time, field="reminder_time"),
        enabled=True,
    )
    session.add(reminder)
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to create reminder for user %s", user_id)
        raise
    await session.refresh(reminder)
    return reminder


async def update_reminder(
    session: AsyncSession,
    *,
    reminder_id: int,
    user_id: int,
    payload: ReminderUpdate,
) -> bool:
    """Apply provided fields; ``False`` means not found or not owned."""
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationError("No data provided for update")
    if "reminder_time" in updates:
        updates["reminder_time"] = validate_clock_time(
            updates["reminder_time"], field="reminder_time"
        )
    if "enabled" in updates and updates["enabled"] is None:
        raise ValidationError("Fields cannot be empty: enabled")

    try:
        result = await session.execute(
            update(Reminder)
            .where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            .values(**updates)
            .execution_options(synchronize_session=False)
        )
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to update reminder %s for user %s", reminder_id, user_id)
        raise
    return result.rowcount > 0


async def delete_reminder(
    session: AsyncSession,
    *,
    reminder_id: int,
    user_id: int,
) -> bool:
    """Remove a reminder owned by ``user_id``."""
    try:
        result = await session.execute(
            delete(Reminder)
            .where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to delete reminder %s for user %s", reminder_id, user_id)
        raise
    return result.rowcount > 0
