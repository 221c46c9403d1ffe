"""Authentication schemas."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from medtracker.schemas.user import UserRead


class Token(BaseModel):
    """Response body for access tokens."""

    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    """JSON login payload."""

    email: EmailStr
    password: str


class RegistrationRequest(BaseModel):
    """Self-service registration payload."""

    username: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6)


class RegistrationResponse(BaseModel):
    """Response after successful registration."""

    token: Token
    user: UserRead
