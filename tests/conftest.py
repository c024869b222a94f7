import os
import tempfile
from datetime import timedelta
from fnmatch import fnmatch
from typing import Any, AsyncIterator

import pytest


os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{tempfile.mkdtemp()}/test.db"

from httpx import ASGITransport, AsyncClient  # noqa: E402

from api.app import app  # noqa: E402
from api.database import db  # noqa: E402
from api.services import events  # noqa: E402
from api.utils.jwt import encode_jwt  # noqa: E402


class FakeRedis:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.data[key] = value

    async def delete(self, *keys: str) -> int:
        return sum(self.data.pop(key, None) is not None for key in keys)

    async def exists(self, *keys: str) -> int:
        return sum(key in self.data for key in keys)

    async def scan_iter(self, match: str) -> AsyncIterator[str]:
        for key in list(self.data):
            if fnmatch(key, match):
                yield key


class FakeEventsService:
    def __init__(self) -> None:
        self.events: dict[str, dict[str, Any]] = {}
        self.lookups: list[str] = []

    def add(self, event_id: str, **kwargs: Any) -> dict[str, Any]:
        self.events[event_id] = {"id": event_id, **kwargs}
        return self.events[event_id]

    async def get_event(self, event_id: str) -> dict[str, Any] | None:
        self.lookups.append(event_id)
        return self.events.get(event_id)


@pytest.fixture(autouse=True)
def redis(monkeypatch: pytest.MonkeyPatch) -> FakeRedis:
    fake = FakeRedis()
    monkeypatch.setattr("api.utils.cache.redis", fake)
    monkeypatch.setattr("api.schemas.user.auth_redis", fake)
    return fake


@pytest.fixture(autouse=True)
def events_service(monkeypatch: pytest.MonkeyPatch) -> FakeEventsService:
    fake = FakeEventsService()
    fake.add("E1", title="Office Hours")
    fake.add("E2", title="Thesis Defense")
    monkeypatch.setattr(events, "get_event", fake.get_event)
    return fake


@pytest.fixture
async def database() -> AsyncIterator[None]:
    await db.create_tables()
    yield
    await db.drop_tables()


@pytest.fixture
async def client(database: None) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def make_token(uid: str = "admin-1", admin: bool = True, rt: str = "refresh-token") -> str:
    return encode_jwt({"uid": uid, "rt": rt, "data": {"email_verified": True, "admin": admin}}, timedelta(minutes=5))


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(uid='user-1', admin=False)}"}
