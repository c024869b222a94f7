from typing import Any, cast

from api.services.internal import InternalService
from api.utils.cache import redis_cached


@redis_cached("events", "event_id")
async def get_event(event_id: str) -> dict[str, Any] | None:
    async with InternalService.EVENTS.client as client:
        response = await client.get(f"/events/{event_id}")
        if response.status_code != 200:
            return None
        return cast(dict[str, Any], response.json())


async def exists_event(event_id: str) -> bool:
    return await get_event(event_id) is not None
