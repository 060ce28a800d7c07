from datetime import timedelta

from redis import asyncio as redis


class RedisStore:
    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    @classmethod
    def from_url(cls, redis_url: str, timeout: float | None = None) -> "RedisStore":
        client = redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        return cls(client)

    async def get(self, key: str) -> str | None:
        data = await self.redis.get(key)
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        if ttl is None:
            await self.redis.set(key, value)
        else:
            await self.redis.setex(key, ttl, value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def close(self) -> None:
        await self.redis.aclose()
