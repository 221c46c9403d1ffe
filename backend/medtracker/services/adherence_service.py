"""Adherence statistics and dose history queries."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.config import get_settings
from medtracker.models.medicine import Medicine
from medtracker.models.medicine_history import HistoryStatus, MedicineHistory
from medtracker.schemas.history import AdherenceStatistics, HistoryFilters, HistoryView


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def window_start(now: datetime, days: int) -> datetime:
    """Return midnight UTC of the day ``days`` days before ``now``."""
    return _start_of_day(now.astimezone(UTC).date() - timedelta(days=days))


def adherence_rate(taken: int, total: int) -> float:
    """Percentage of ``taken`` over ``total``, halves rounded up to 2 places."""
    if not total:
        return 0.0
    rate = Decimal(taken * 100) / Decimal(total)
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


async def _count_history(session: AsyncSession, *, user_id: int, status: str) -> int:
    stmt = select(func.count(MedicineHistory.id)).where(
        MedicineHistory.user_id == user_id, MedicineHistory.status == status
    )
    return int((await session.execute(stmt)).scalar_one())


async def get_statistics(
    session: AsyncSession,
    *,
    user_id: int,
    now: datetime | None = None,
) -> AdherenceStatistics:
    """Summarize a user's adherence.

    Taken/missed totals cover the whole history while the adherence rate only
    looks at the trailing window (``ADHERENCE_WINDOW_DAYS``).
    """
    settings = get_settings()
    current = now or datetime.now(UTC)

    total_medicines = (
        await session.execute(
            select(func.count(Medicine.id)).where(
                Medicine.user_id == user_id, Medicine.active.is_(True)
            )
        )
    ).scalar_one()
    total_taken = await _count_history(
        session, user_id=user_id, status=HistoryStatus.TAKEN.value
    )
    total_missed = await _count_history(
        session, user_id=user_id, status=HistoryStatus.MISSED.value
    )

    window_stmt = select(
        func.count(MedicineHistory.id),
        func.coalesce(
            func.sum(
                case((MedicineHistory.status == HistoryStatus.TAKEN.value, 1), else_=0)
            ),
            0,
        ),
    ).where(
        MedicineHistory.user_id == user_id,
        MedicineHistory.taken_at >= window_start(current, settings.adherence_window_days),
    )
    window_total, window_taken = (await session.execute(window_stmt)).one()

    return AdherenceStatistics(
        total_medicines=int(total_medicines),
        total_doses_taken=total_taken,
        total_doses_missed=total_missed,
        adherence_rate=adherence_rate(int(window_taken), int(window_total)),
    )


async def list_history(
    session: AsyncSession,
    *,
    user_id: int,
    filters: HistoryFilters | None = None,
) -> list[HistoryView]:
    """Return the user's history, newest first, narrowed by every given filter."""
    filters = filters or HistoryFilters()
    stmt = (
        select(MedicineHistory, Medicine.name, Medicine.dosage)
        .join(Medicine, MedicineHistory.medicine_id == Medicine.id)
        .where(MedicineHistory.user_id == user_id)
    )
    if filters.date_from is not None:
        stmt = stmt.where(MedicineHistory.taken_at >= _start_of_day(filters.date_from))
    if filters.date_to is not None:
        stmt = stmt.where(
            MedicineHistory.taken_at < _start_of_day(filters.date_to + timedelta(days=1))
        )
    if filters.medicine_id is not None:
        stmt = stmt.where(MedicineHistory.medicine_id == filters.medicine_id)
    stmt = stmt.order_by(MedicineHistory.taken_at.desc(), MedicineHistory.id.desc())

    result = await session.execute(stmt)
    return [
        HistoryView(
            id=record.id,
            medicine_id=record.medicine_id,
            user_id=record.user_id,
            taken_at=record.taken_at,
            status=record.status,
            notes=record.notes,
            medicine_name=medicine_name,
            dosage=dosage,
        )
        for record, medicine_name, dosage in result.all()
    ]
