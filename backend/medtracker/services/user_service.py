"""User data access helpers."""
from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from medtracker.core.security import get_password_hash
from medtracker.models.user import User
from medtracker.schemas.auth import RegistrationRequest


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    """Return a user by ID."""
    return await session.get(User, user_id)


async def identity_taken(session: AsyncSession, *, email: str, username: str) -> bool:
    """Return whether the email or username is already registered."""
    result = await session.execute(
        select(User.id).where(or_(User.email == email, User.username == username))
    )
    return result.first() is not None


async def create_user(session: AsyncSession, payload: RegistrationRequest) -> User:
    """Persist a new user with hashed password."""
    user = User(
        username=payload.username.strip(),
        email=payload.email.lower(),
        hashed_password=get_password_hash(payload.password),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(user)
    return user
