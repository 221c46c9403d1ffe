"""Medicine registry API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from medtracker.db.session import get_sessionmaker
from medtracker.models import Medicine, Schedule

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def _headers(app_context: dict[str, Any], who: str) -> dict[str, str]:
    return await _authenticate(
        app_context["client"], app_context[f"{who}_email"], app_context["password"]
    )


ASPIRIN = {
    "name": "Aspirin",
    "dosage": "100mg",
    "frequency": "daily",
    "start_date": "2025-07-01",
    "notes": "With food",
}


async def test_medicine_lifecycle(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(app_context, "alice")

    create_resp = await client.post("/api/v1/medicines", json=ASPIRIN, headers=headers)
    assert create_resp.status_code == 201
    created = create_resp.json()
    assert created["id"]
    assert created["user_id"] == app_context["alice_id"]
    assert created["active"] is True
    assert created["created_at"]

    second = await client.post(
        "/api/v1/medicines",
        json={**ASPIRIN, "name": "Ibuprofen", "frequency": "as-needed"},
        headers=headers,
    )
    assert second.status_code == 201

    list_resp = await client.get("/api/v1/medicines", headers=headers)
    assert list_resp.status_code == 200
    assert [item["name"] for item in list_resp.json()] == ["Ibuprofen", "Aspirin"]

    update_resp = await client.put(
        f"/api/v1/medicines/{created['id']}",
        json={"dosage": "81mg"},
        headers=headers,
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["dosage"] == "81mg"
    assert update_resp.json()["name"] == "Aspirin"

    delete_resp = await client.delete(f"/api/v1/medicines/{created['id']}", headers=headers)
    assert delete_resp.status_code == 200

    remaining = await client.get("/api/v1/medicines", headers=headers)
    assert [item["name"] for item in remaining.json()] == ["Ibuprofen"]

    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        medicine = await session.get(Medicine, created["id"])
        assert medicine is not None
        assert medicine.active is False
        schedules = (
            await session.execute(
                select(func.count(Schedule.id)).where(Schedule.medicine_id == created["id"])
            )
        ).scalar_one()
        assert schedules == 1


async def test_create_reports_every_missing_field(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(app_context, "alice")

    response = await client.post(
        "/api/v1/medicines",
        json={"name": "  ", "frequency": "daily"},
        headers=headers,
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "name" in detail and "dosage" in detail and "start_date" in detail

    listing = await client.get("/api/v1/medicines", headers=headers)
    assert listing.json() == []


async def test_create_rejects_unparseable_start_date(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(app_context, "alice")

    response = await client.post(
        "/api/v1/medicines",
        json={**ASPIRIN, "start_date": "not-a-date"},
        headers=headers,
    )
    assert response.status_code == 400


async def test_unknown_frequency_still_creates_medicine(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(app_context, "alice")

    response = await client.post(
        "/api/v1/medicines",
        json={**ASPIRIN, "frequency": "once a day"},
        headers=headers,
    )
    assert response.status_code == 201

    today = await client.get("/api/v1/schedules/today", headers=headers)
    assert today.json() == []


async def test_update_requires_fields(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _headers(app_context, "alice")
    created = (await client.post("/api/v1/medicines", json=ASPIRIN, headers=headers)).json()

    empty = await client.put(f"/api/v1/medicines/{created['id']}", json={}, headers=headers)
    assert empty.status_code == 400

    blank = await client.put(
        f"/api/v1/medicines/{created['id']}", json={"name": ""}, headers=headers
    )
    assert blank.status_code == 400


async def test_other_user_cannot_touch_medicine(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    alice = await _headers(app_context, "alice")
    bob = await _headers(app_context, "bob")
    created = (await client.post("/api/v1/medicines", json=ASPIRIN, headers=alice)).json()
    medicine_url = f"/api/v1/medicines/{created['id']}"

    get_resp = await client.get(medicine_url, headers=bob)
    update_resp = await client.put(medicine_url, json={"name": "Stolen"}, headers=bob)
    delete_resp = await client.delete(medicine_url, headers=bob)
    missing_resp = await client.delete("/api/v1/medicines/99999", headers=bob)

    assert get_resp.status_code == 404
    assert update_resp.status_code == 404
    assert delete_resp.status_code == 404
    assert missing_resp.status_code == 404
    assert delete_resp.json() == missing_resp.json()

    bob_list = await client.get("/api/v1/medicines", headers=bob)
    assert bob_list.json() == []

    alice_view = await client.get(medicine_url, headers=alice)
    assert alice_view.json()["name"] == "Aspirin"
    assert alice_view.json()["active"] is True


async def test_medicines_require_authentication(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/medicines")
    assert response.status_code == 401

    bad_token = await client.get(
        "/api/v1/medicines", headers={"Authorization": "Bearer not-a-token"}
    )
    assert bad_token.status_code == 401
