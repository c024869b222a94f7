import inspect
import json
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from api.redis import redis
from api.settings import settings


T = TypeVar("T")


def redis_cached(key: str, *args: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Cache the json serializable result of an async function in redis.

    The cache key is built from `key`, the function name and the values of the arguments named in `args`.
    Results are kept for `settings.cache_ttl` seconds, `None` is never cached.
    """

    def deco(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        signature = inspect.signature(func)

        @wraps(func)
        async def inner(*_args: Any, **_kwargs: Any) -> T:
            if not settings.cache_ttl:
                return await func(*_args, **_kwargs)

            arguments = signature.bind(*_args, **_kwargs).arguments
            cache_key = ":".join(["cache", key, func.__name__, *(str(arguments.get(arg)) for arg in args)])
            if (value := await redis.get(cache_key)) is not None:
                return json.loads(value)  # type: ignore

            result = await func(*_args, **_kwargs)
            if result is not None:
                await redis.setex(cache_key, settings.cache_ttl, json.dumps(result))
            return result

        return inner

    return deco


async def clear_cache(key: str) -> None:
    async for k in redis.scan_iter(f"cache:{key}:*"):
        await redis.delete(k)
