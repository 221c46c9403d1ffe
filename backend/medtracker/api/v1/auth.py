"""Authentication endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.exc import IntegrityError

from medtracker.api.deps import CurrentUser, SessionDep
from medtracker.core.config import get_settings
from medtracker.schemas.auth import (
    LoginRequest,
    RegistrationRequest,
    RegistrationResponse,
    Token,
)
from medtracker.schemas.user import UserRead
from medtracker.services import user_service
from medtracker.services.auth_service import authenticate_user, create_access_token_for_user

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse ``"10/minute"`` into ``(times, seconds)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    return count, _SECONDS.get(window_str.strip().lower(), fallback[1])


_LOGIN_LIMIT = _parse_rate(_settings.rate_limit_login, fallback=(10, 60))
_DEFAULT_LIMIT = _parse_rate(_settings.rate_limit_default, fallback=(100, 60))


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(_LOGIN_LIMIT)
_DEFAULT_RATE_DEP = _rate_dependency(_DEFAULT_LIMIT)

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register(payload: RegistrationRequest, session: SessionDep) -> RegistrationResponse:
    """Create an account and return a bearer token for it."""
    if await user_service.identity_taken(
        session, email=payload.email.lower(), username=payload.username.strip()
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email or username already exists",
        )
    try:
        user = await user_service.create_user(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email or username already exists",
        ) from exc
    logger.info("Registered user %s", user.id)
    return RegistrationResponse(
        token=Token(access_token=create_access_token_for_user(user)),
        user=UserRead.model_validate(user),
    )


@router.post(
    "/token",
    response_model=Token,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: SessionDep,
) -> Token:
    """Validate form credentials (username field carries the email)."""
    user = await authenticate_user(
        session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise _INVALID_CREDENTIALS
    return Token(access_token=create_access_token_for_user(user))


@router.post(
    "/login",
    response_model=Token,
    summary="Obtain access token from a JSON body",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login(payload: LoginRequest, session: SessionDep) -> Token:
    """Validate JSON credentials and issue a bearer token."""
    user = await authenticate_user(session, email=payload.email, password=payload.password)
    if not user:
        raise _INVALID_CREDENTIALS
    return Token(access_token=create_access_token_for_user(user))


@router.get("/me", response_model=UserRead, summary="Current user")
async def read_current_user(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)
