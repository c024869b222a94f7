from datetime import timedelta
from enum import Enum

from httpx import AsyncClient

from api.settings import settings
from api.utils.jwt import encode_jwt


def create_internal_jwt() -> str:
    return encode_jwt({}, timedelta(seconds=settings.internal_jwt_ttl))


class InternalService(Enum):
    EVENTS = "events"

    @property
    def base_url(self) -> str:
        return getattr(settings, f"{self.value}_url").rstrip("/") + "/_internal"

    @property
    def client(self) -> AsyncClient:
        return AsyncClient(base_url=self.base_url, headers={"Authorization": create_internal_jwt()})
