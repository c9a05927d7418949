"""Redis idempotency store adapter."""

from typing import Optional

from redis import asyncio as aioredis

from app.application.ports.idempotency_store import IdempotencyStore


class RedisIdempotencyStore(IdempotencyStore):
    """Redis adapter for idempotency store."""

    KEY_PREFIX = "lead_engine:idempotency:claim:"
    RESPONSE_KEY_PREFIX = "lead_engine:idempotency:response:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis idempotency store.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    def _make_response_key(self, key: str) -> str:
        return f"{self.RESPONSE_KEY_PREFIX}{key}"

    async def reserve(self, key: str, ttl_seconds: int) -> bool:
        """
        Claim a key with SET NX so only one request processes it.

        Args:
            key: Idempotency key
            ttl_seconds: Time-to-live in seconds

        Returns:
            True if the claim was created by this call
        """
        client = await self._get_client()
        claimed = await client.set(self._make_key(key), "1", ex=ttl_seconds, nx=True)
        return bool(claimed)

    async def release(self, key: str) -> None:
        client = await self._get_client()
        await client.delete(self._make_key(key))

    async def get_response(self, key: str) -> Optional[str]:
        client = await self._get_client()
        return await client.get(self._make_response_key(key))

    async def store_response(self, key: str, response: str, ttl_seconds: int) -> None:
        client = await self._get_client()
        await client.setex(self._make_response_key(key), ttl_seconds, response)

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
