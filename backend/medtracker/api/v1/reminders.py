"""Reminder configuration endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from medtracker.api.deps import CurrentUser, SessionDep
from medtracker.core.errors import ValidationError
from medtracker.schemas.common import MessageResponse
from medtracker.schemas.reminder import (
    ReminderCreate,
    ReminderRead,
    ReminderUpdate,
    ReminderView,
)
from medtracker.services import medicine_service, reminder_service

router = APIRouter(prefix="/reminders")

_NOT_FOUND = "Reminder not found"


@router.get("", response_model=list[ReminderView], summary="List enabled reminders")
async def list_reminders(session: SessionDep, current_user: CurrentUser) -> list[ReminderView]:
    return await reminder_service.list_reminders(session, user_id=current_user.id)


@router.post(
    "",
    response_model=ReminderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reminder",
)
async def create_reminder(
    payload: ReminderCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> ReminderRead:
    if payload.medicine_id is not None:
        medicine = await medicine_service.get_medicine(
            session, medicine_id=payload.medicine_id, user_id=current_user.id
        )
        if medicine is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    try:
        reminder = await reminder_service.create_reminder(
            session, payload, user_id=current_user.id
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ReminderRead.model_validate(reminder)


@router.put("/{reminder_id}", response_model=MessageResponse, summary="Update reminder")
async def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> MessageResponse:
    try:
        updated = await reminder_service.update_reminder(
            session,
            reminder_id=reminder_id,
            user_id=current_user.id,
            payload=payload,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return MessageResponse(message="Reminder updated successfully")


@router.delete("/{reminder_id}", response_model=MessageResponse, summary="Delete reminder")
async def delete_reminder(
    reminder_id: int,
    session: SessionDep,
    current_user: CurrentUser,
) -> MessageResponse:
    deleted = await reminder_service.delete_reminder(
        session, reminder_id=reminder_id, user_id=current_user.id
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return MessageResponse(message="Reminder deleted successfully")
