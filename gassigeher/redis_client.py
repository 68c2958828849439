from functools import lru_cache

from redis import Redis

from .config import settings


@lru_cache
def get_redis() -> Redis:
    if not settings.redis_url:
        raise RuntimeError("REDIS_URL is not set but the redis holiday cache backend is enabled")
    return Redis.from_url(settings.redis_url, socket_timeout=2.0)
