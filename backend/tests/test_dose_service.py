"""Tests for the dose tracking service."""

from __future__ import annotations

import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.errors import ValidationError
from medtracker.db.session import get_sessionmaker
from medtracker.models import Medicine, MedicineHistory, Schedule, User
from medtracker.services import dose_service

pytestmark = pytest.mark.asyncio


async def _seed_schedule(session: AsyncSession, user: User) -> Schedule:
    medicine = Medicine(
        user_id=user.id,
        name="Metformin",
        dosage="500mg",
        frequency="daily",
        start_date=datetime.date(2026, 1, 1),
    )
    session.add(medicine)
    await session.flush()
    schedule = Schedule(
        medicine_id=medicine.id,
        scheduled_time="09:00",
        scheduled_date=datetime.date(2026, 1, 1),
    )
    session.add(schedule)
    await session.commit()
    return schedule


async def _state(schedule_id: int) -> tuple[bool, int]:
    async with get_sessionmaker()() as session:
        schedule = await session.get(Schedule, schedule_id)
        history = (
            await session.execute(select(func.count(MedicineHistory.id)))
        ).scalar_one()
        return schedule.taken, history


async def test_mark_taken_updates_schedule_and_appends_history(
    db_session: AsyncSession, users: dict[str, User]
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])

    assert await dose_service.mark_taken(
        db_session, schedule_id=schedule.id, user_id=users["alice"].id
    )

    async with get_sessionmaker()() as session:
        stored = await session.get(Schedule, schedule.id)
        assert stored.taken is True
        assert stored.taken_at is not None
        records = (await session.execute(select(MedicineHistory))).scalars().all()
    assert len(records) == 1
    assert records[0].status == "taken"
    assert records[0].user_id == users["alice"].id
    assert records[0].medicine_id == schedule.medicine_id


async def test_mark_taken_is_one_way(
    db_session: AsyncSession, users: dict[str, User]
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])
    alice_id = users["alice"].id

    assert await dose_service.mark_taken(db_session, schedule_id=schedule.id, user_id=alice_id)
    assert not await dose_service.mark_taken(
        db_session, schedule_id=schedule.id, user_id=alice_id
    )
    assert await _state(schedule.id) == (True, 1)


async def test_mark_taken_by_non_owner_changes_nothing(
    db_session: AsyncSession, users: dict[str, User]
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])

    assert not await dose_service.mark_taken(
        db_session, schedule_id=schedule.id, user_id=users["bob"].id
    )
    assert not await dose_service.mark_taken(
        db_session, schedule_id=424242, user_id=users["bob"].id
    )
    assert await _state(schedule.id) == (False, 0)


async def test_history_failure_rolls_back_schedule_update(
    db_session: AsyncSession,
    users: dict[str, User],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])
    schedule_id = schedule.id
    user_id = users["alice"].id

    def _explode(**_: object) -> MedicineHistory:
        raise SQLAlchemyError("history table unavailable")

    monkeypatch.setattr(dose_service, "_history_record", _explode)

    with pytest.raises(SQLAlchemyError):
        await dose_service.mark_taken(
            db_session, schedule_id=schedule_id, user_id=user_id
        )

    assert await _state(schedule_id) == (False, 0)


async def test_record_history_stores_status_and_notes(
    db_session: AsyncSession, users: dict[str, User]
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])

    record = await dose_service.record_history(
        db_session,
        medicine_id=schedule.medicine_id,
        user_id=users["alice"].id,
        status="missed",
        notes="Overslept",
    )

    assert record.id is not None
    assert record.status == "missed"
    assert record.notes == "Overslept"
    assert record.taken_at is not None


async def test_record_history_requires_status(
    db_session: AsyncSession, users: dict[str, User]
) -> None:
    schedule = await _seed_schedule(db_session, users["alice"])

    with pytest.raises(ValidationError):
        await dose_service.record_history(
            db_session,
            medicine_id=schedule.medicine_id,
            user_id=users["alice"].id,
            status=" ",
        )
