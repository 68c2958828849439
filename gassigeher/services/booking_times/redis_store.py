# gassigeher/services/booking_times/redis_store.py
"""
Redis storage for the external holiday cache.

Key format: holidays:cache:{region}:{year}
Value: JSON-serialized HolidayCacheEntry (holidays, fetched_at, expires_at, version).

A refresh is a single SET, so readers never see a partially written
entry. The key outlives expires_at by STALE_RETENTION so an expired entry
is still available as a fallback when the source is down.
"""

from datetime import timedelta, timezone

from redis import Redis

from ...domain import HolidayCacheEntry

STALE_RETENTION = timedelta(days=30)


class RedisHolidayCacheStore:
    """Redis storage wrapper for HolidayCacheEntry values."""

    KEY_PREFIX = "holidays:cache"

    def __init__(self, redis: Redis):
        self.redis = redis

    def _key(self, year: int, region: str) -> str:
        return f"{self.KEY_PREFIX}:{region}:{year}"

    def get_entry(self, year: int, region: str) -> HolidayCacheEntry | None:
        raw = self.redis.get(self._key(year, region))
        if raw is None:
            return None
        return HolidayCacheEntry.from_json(raw)

    def replace_entry(self, entry: HolidayCacheEntry) -> None:
        keep_until = entry.expires_at + STALE_RETENTION
        self.redis.set(
            self._key(entry.year, entry.region),
            entry.to_json(),
            exat=int(keep_until.replace(tzinfo=timezone.utc).timestamp()),
        )
