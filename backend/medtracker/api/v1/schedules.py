"""Schedule endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from medtracker.api.deps import CurrentUser, SessionDep
from medtracker.core.errors import ValidationError
from medtracker.schemas.common import MessageResponse
from medtracker.schemas.schedule import ScheduleCreate, ScheduleRead, ScheduleView
from medtracker.services import dose_service, medicine_service, schedule_service

router = APIRouter(prefix="/schedules")


@router.get("", response_model=list[ScheduleView], summary="List all schedule entries")
async def list_schedules(session: SessionDep, current_user: CurrentUser) -> list[ScheduleView]:
    return await schedule_service.list_schedules(session, user_id=current_user.id)


@router.get("/today", response_model=list[ScheduleView], summary="Today's schedule")
async def todays_schedule(session: SessionDep, current_user: CurrentUser) -> list[ScheduleView]:
    return await schedule_service.list_todays_schedule(session, user_id=current_user.id)


@router.post(
    "",
    response_model=ScheduleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a schedule entry manually",
)
async def create_schedule(
    payload: ScheduleCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> ScheduleRead:
    missing = [
        field
        for field in ("medicine_id", "scheduled_time")
        if getattr(payload, field) in (None, "")
    ]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(ValidationError.missing_fields(missing)),
        )
    medicine = await medicine_service.get_medicine(
        session, medicine_id=payload.medicine_id, user_id=current_user.id
    )
    if medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    try:
        schedule = await schedule_service.create_ad_hoc_schedule(
            session,
            medicine_id=medicine.id,
            scheduled_time=payload.scheduled_time,
            scheduled_date=payload.scheduled_date,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ScheduleRead.model_validate(schedule)


@router.put("/{schedule_id}/taken", response_model=MessageResponse, summary="Mark dose taken")
async def mark_schedule_taken(
    schedule_id: int,
    session: SessionDep,
    current_user: CurrentUser,
) -> MessageResponse:
    marked = await dose_service.mark_taken(
        session, schedule_id=schedule_id, user_id=current_user.id
    )
    if not marked:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Schedule not found")
    return MessageResponse(message="Schedule marked as taken")
