"""Medicine registry services."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.errors import ValidationError
from medtracker.models.medicine import Medicine
from medtracker.schemas.medicine import MedicineCreate, MedicineUpdate
from medtracker.services import schedule_service

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "dosage", "frequency", "start_date")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def validate_medicine(payload: MedicineCreate) -> None:
    """Raise ``ValidationError`` listing every missing required field."""
    missing = [field for field in REQUIRED_FIELDS if _is_blank(getattr(payload, field))]
    if missing:
        raise ValidationError.missing_fields(missing)


async def create_medicine(
    session: AsyncSession,
    payload: MedicineCreate,
    *,
    user_id: int,
) -> Medicine:
    """Insert a medicine and generate today's schedule in one transaction."""
    validate_medicine(payload)
    medicine = Medicine(
        user_id=user_id,
        name=_clean(payload.name),
        dosage=_clean(payload.dosage),
        frequency=_clean(payload.frequency),
        start_date=payload.start_date,
        end_date=payload.end_date,
        notes=payload.notes,
        active=True,
    )
    session.add(medicine)
    try:
        await session.flush()
        await schedule_service.generate_schedules(
            session,
            medicine_id=medicine.id,
            frequency=medicine.frequency,
            start_date=medicine.start_date,
        )
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to create medicine for user %s", user_id)
        raise
    await session.refresh(medicine)
    logger.info("Created medicine %s for user %s", medicine.id, user_id)
    return medicine


async def list_medicines(session: AsyncSession, *, user_id: int) -> list[Medicine]:
    """Return the user's active medicines, newest first."""
    stmt = (
        select(Medicine)
        .where(Medicine.user_id == user_id, Medicine.active.is_(True))
        .order_by(Medicine.created_at.desc(), Medicine.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_medicine(
    session: AsyncSession,
    *,
    medicine_id: int,
    user_id: int,
) -> Medicine | None:
    """Return a medicine owned by ``user_id``, or ``None``."""
    stmt = select(Medicine).where(Medicine.id == medicine_id, Medicine.user_id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def update_medicine(
    session: AsyncSession,
    *,
    medicine_id: int,
    user_id: int,
    payload: MedicineUpdate,
) -> bool:
    """Apply the provided fields; ``False`` means not found or not owned."""
    updates = {key: _clean(value) for key, value in payload.model_dump(exclude_unset=True).items()}
    if not updates:
        raise ValidationError("No data provided for update")
    blank = [field for field in REQUIRED_FIELDS if field in updates and _is_blank(updates[field])]
    if blank:
        raise ValidationError(f"Fields cannot be empty: {', '.join(blank)}")

    stmt = (
        update(Medicine)
        .where(Medicine.id == medicine_id, Medicine.user_id == user_id)
        .values(**updates)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to update medicine %s for user %s", medicine_id, user_id)
        raise
    return result.rowcount > 0


async def soft_delete_medicine(
    session: AsyncSession,
    *,
    medicine_id: int,
    user_id: int,
) -> bool:
    """Mark a medicine inactive; schedules and history are kept."""
    stmt = (
        update(Medicine)
        .where(Medicine.id == medicine_id, Medicine.user_id == user_id)
        .values(active=False)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to deactivate medicine %s for user %s", medicine_id, user_id)
        raise
    if result.rowcount:
        logger.info("Deactivated medicine %s for user %s", medicine_id, user_id)
    return result.rowcount > 0
