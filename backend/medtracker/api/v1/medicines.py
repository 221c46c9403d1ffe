"""Medicine registry endpoints."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from medtracker.api.deps import CurrentUser, SessionDep
from medtracker.core.errors import ValidationError
from medtracker.schemas.common import MessageResponse
from medtracker.schemas.history import HistoryRead, HistoryRecordCreate
from medtracker.schemas.medicine import MedicineCreate, MedicineRead, MedicineUpdate
from medtracker.services import dose_service, medicine_service

router = APIRouter(prefix="/medicines")

_NOT_FOUND = "Medicine not found"


@router.get("", response_model=list[MedicineRead], summary="List active medicines")
async def list_medicines(session: SessionDep, current_user: CurrentUser) -> list[MedicineRead]:
    medicines = await medicine_service.list_medicines(session, user_id=current_user.id)
    return [MedicineRead.model_validate(obj) for obj in medicines]


@router.post(
    "",
    response_model=MedicineRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create medicine and today's schedule",
)
async def create_medicine(
    payload: MedicineCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> MedicineRead:
    try:
        medicine = await medicine_service.create_medicine(
            session, payload, user_id=current_user.id
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return MedicineRead.model_validate(medicine)


@router.get("/{medicine_id}", response_model=MedicineRead, summary="Get medicine")
async def get_medicine(
    medicine_id: int,
    session: SessionDep,
    current_user: CurrentUser,
) -> MedicineRead:
    medicine = await medicine_service.get_medicine(
        session, medicine_id=medicine_id, user_id=current_user.id
    )
    if medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return MedicineRead.model_validate(medicine)


@router.put("/{medicine_id}", response_model=MedicineRead, summary="Update medicine")
async def update_medicine(
    medicine_id: int,
    payload: MedicineUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> MedicineRead:
    try:
        updated = await medicine_service.update_medicine(
            session,
            medicine_id=medicine_id,
            user_id=current_user.id,
            payload=payload,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    medicine = await medicine_service.get_medicine(
        session, medicine_id=medicine_id, user_id=current_user.id
    )
    return MedicineRead.model_validate(medicine)


@router.delete("/{medicine_id}", response_model=MessageResponse, summary="Delete medicine")
async def delete_medicine(
    medicine_id: int,
    session: SessionDep,
    current_user: CurrentUser,
) -> MessageResponse:
    deleted = await medicine_service.soft_delete_medicine(
        session, medicine_id=medicine_id, user_id=current_user.id
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return MessageResponse(message="Medicine deleted successfully")


@router.post(
    "/{medicine_id}/record",
    response_model=HistoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a dose event",
)
async def record_dose(
    medicine_id: int,
    payload: HistoryRecordCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> HistoryRead:
    medicine = await medicine_service.get_medicine(
        session, medicine_id=medicine_id, user_id=current_user.id
    )
    if medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    try:
        record = await dose_service.record_history(
            session,
            medicine_id=medicine.id,
            user_id=current_user.id,
            status=payload.status,
            notes=payload.notes,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return HistoryRead.model_validate(record)
