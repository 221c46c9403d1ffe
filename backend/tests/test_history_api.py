"""History and statistics API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from medtracker.services import adherence_service

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_store_failure_returns_generic_error(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(
        client, app_context["alice_email"], app_context["password"]
    )

    async def _explode(*_: object, **__: object) -> None:
        raise SQLAlchemyError("secret detail about users table")

    monkeypatch.setattr(adherence_service, "get_statistics", _explode)

    response = await client.get("/api/v1/stats", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "secret detail" not in response.text
