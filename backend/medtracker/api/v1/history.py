"""Dose history and adherence statistics endpoints."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter

from medtracker.api.deps import CurrentUser, SessionDep
from medtracker.schemas.history import AdherenceStatistics, HistoryFilters, HistoryView
from medtracker.services import adherence_service

router = APIRouter()


@router.get("/history", response_model=list[HistoryView], summary="Dose history")
async def list_history(
    session: SessionDep,
    current_user: CurrentUser,
    date_from: date | None = None,
    date_to: date | None = None,
    medicine_id: int | None = None,
) -> list[HistoryView]:
    filters = HistoryFilters(date_from=date_from, date_to=date_to, medicine_id=medicine_id)
    return await adherence_service.list_history(
        session, user_id=current_user.id, filters=filters
    )


@router.get("/stats", response_model=AdherenceStatistics, summary="Adherence statistics")
async def statistics(session: SessionDep, current_user: CurrentUser) -> AdherenceStatistics:
    return await adherence_service.get_statistics(session, user_id=current_user.id)
