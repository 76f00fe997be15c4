from datetime import timedelta

from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.rates import CacheError
from domain.models.rates import RatePoint


class RedisCacheService:
    """Hot tier for bucket rates. Values are write-once (SET NX)."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client
        self.rate_ttl = timedelta(hours=24)

    def _make_rate_key(self, currency: str, bucket: int) -> str:
        return f"rate:{currency}:{bucket}"

    async def get_rates(self, currency: str, buckets: list[int]) -> dict[int, float]:
        if not buckets:
            return {}

        keys = [self._make_rate_key(currency, bucket) for bucket in buckets]
        try:
            values = await self.redis.mget(keys)
        except RedisError as e:
            raise CacheError(f"Redis read failed: {e}") from e

        found: dict[int, float] = {}
        for bucket, value in zip(buckets, values, strict=True):
            if value is None:
                continue
            try:
                found[bucket] = float(value)
            except (TypeError, ValueError) as e:
                raise CacheError(f"Invalid rate data under {self._make_rate_key(currency, bucket)}") from e
        return found

    async def set_rates(self, points: list[RatePoint]) -> None:
        try:
            for point in points:
                await self.redis.set(
                    self._make_rate_key(point.currency, point.bucket),
                    repr(point.rate),
                    ex=self.rate_ttl,
                    nx=True,
                )
        except RedisError as e:
            raise CacheError(f"Redis write failed: {e}") from e

    async def health_check(self) -> str | None:
        try:
            await self.redis.ping()
            return None
        except RedisError as e:
            return str(e)
