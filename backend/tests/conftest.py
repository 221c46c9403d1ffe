"""Test fixtures for the medicine tracker backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["DB_AUTO_CREATE"] = "false"

from medtracker.core.config import get_settings
from medtracker.core.security import get_password_hash
from medtracker.db.base import Base
from medtracker.db.session import dispose_engine, get_sessionmaker
from medtracker.main import app
from medtracker.models import User

PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


async def _seed_user(session: AsyncSession, username: str) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(PASSWORD),
    )
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture()
async def db_session(reset_database: None, db_url: str) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the freshly reset test database."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture()
async def users(db_session: AsyncSession) -> dict[str, User]:
    """Seed two independent users for ownership checks."""
    alice = await _seed_user(db_session, "alice")
    bob = await _seed_user(db_session, "bob")
    await db_session.commit()
    return {"alice": alice, "bob": bob}


@pytest_asyncio.fixture()
async def app_context(
    users: dict[str, User],
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus credentials for the seeded users."""
    context: dict[str, object] = {
        "password": PASSWORD,
        "alice_id": users["alice"].id,
        "alice_email": users["alice"].email,
        "bob_id": users["bob"].id,
        "bob_email": users["bob"].email,
    }
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context

