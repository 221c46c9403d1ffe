"""Versioned API router."""

from fastapi import APIRouter

from . import auth, health, history, medicines, reminders, schedules

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(medicines.router, tags=["medicines"])
router.include_router(schedules.router, tags=["schedules"])
router.include_router(history.router, tags=["history"])
router.include_router(reminders.router, tags=["reminders"])

__all__ = ["router"]
