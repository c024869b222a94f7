from redis.asyncio import Redis

from api.settings import settings


redis: Redis = Redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
auth_redis: Redis = Redis.from_url(settings.auth_redis_url, encoding="utf-8", decode_responses=True)
