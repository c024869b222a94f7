from typing import Any

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import text

from api.database import db
from conftest import FakeEventsService, FakeRedis


SLOT = {"event_id": "E1", "date": "2024-03-01", "start_time": "14:30", "end_time": "15:00", "purpose": "Advising"}
BOOKING = {"name": "A", "email": "a@example.com", "enrollment": "1"}


async def reject_writes(operation: str) -> None:
    async with db.engine.begin() as conn:
        await conn.execute(
            text(
                f"CREATE TRIGGER reject_{operation.lower()} BEFORE {operation} ON booking_slots "
                "BEGIN SELECT RAISE(ABORT, 'store unavailable'); END"
            )
        )


async def create_slot(client: AsyncClient, headers: dict[str, str]) -> dict[str, Any]:
    response = await client.post("/slots", json=SLOT, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()  # type: ignore


def assert_server_error(response: httpx.Response, error: str) -> None:
    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json()["detail"] == "Server error"
    assert error in response.json()["error"]


@pytest.mark.parametrize("path", ["/slots", "/slots/event/E1", "/slots/some-id"])
async def test__read__store_unavailable(path: str, client: AsyncClient) -> None:
    async with db.engine.begin() as conn:
        await conn.execute(text("DROP TABLE booking_slots"))

    assert_server_error(await client.get(path), "no such table")


async def test__create_slot__store_unavailable(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    await reject_writes("INSERT")

    response = await client.post("/slots", json=SLOT, headers=admin_headers)

    assert_server_error(response, "store unavailable")
    assert (await client.get("/slots")).json() == []


async def test__update_slot__store_unavailable(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    slot = await create_slot(client, admin_headers)
    await reject_writes("UPDATE")

    response = await client.put(f"/slots/{slot['id']}", json={"purpose": "Exam review"}, headers=admin_headers)

    assert_server_error(response, "store unavailable")
    assert (await client.get(f"/slots/{slot['id']}")).json()["purpose"] == "Advising"


async def test__delete_slot__store_unavailable(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    slot = await create_slot(client, admin_headers)
    await reject_writes("DELETE")

    response = await client.delete(f"/slots/{slot['id']}", headers=admin_headers)

    assert_server_error(response, "store unavailable")
    assert (await client.get(f"/slots/{slot['id']}")).status_code == 200


async def test__book_slot__store_unavailable(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    slot = await create_slot(client, admin_headers)
    await reject_writes("UPDATE")

    response = await client.post(f"/slots/{slot['id']}/book", json=BOOKING)

    assert_server_error(response, "store unavailable")
    assert (await client.get(f"/slots/{slot['id']}")).json()["status"] == "available"


async def test__create_slot__cache_kept_on_store_error(
    client: AsyncClient, admin_headers: dict[str, str], redis: FakeRedis
) -> None:
    await client.get("/slots")
    await reject_writes("INSERT")

    await client.post("/slots", json=SLOT, headers=admin_headers)

    assert "cache:slots:list_all_slots" in redis.data


async def test__create_slot__events_service_unreachable(
    client: AsyncClient, admin_headers: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def unreachable(event_id: str) -> None:
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("api.services.events.get_event", unreachable)

    response = await client.post("/slots", json=SLOT, headers=admin_headers)

    assert_server_error(response, "connection refused")
    assert (await client.get("/slots")).json() == []


async def test__get_slot__events_service_unreachable(
    client: AsyncClient,
    admin_headers: dict[str, str],
    events_service: FakeEventsService,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    slot = await create_slot(client, admin_headers)

    async def unreachable(event_id: str) -> None:
        events_service.lookups.append(event_id)
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("api.services.events.get_event", unreachable)

    assert_server_error(await client.get(f"/slots/{slot['id']}"), "connection refused")
    assert events_service.lookups[-1] == "E1"
