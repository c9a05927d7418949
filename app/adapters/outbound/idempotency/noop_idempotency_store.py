"""No-op idempotency store adapter for when idempotency is disabled."""

from typing import Optional

from app.application.ports.idempotency_store import IdempotencyStore


class NoOpIdempotencyStore(IdempotencyStore):
    """Every request is treated as new."""

    async def reserve(self, key: str, ttl_seconds: int) -> bool:
        """Always grant the claim."""
        return True

    async def release(self, key: str) -> None:
        pass

    async def get_response(self, key: str) -> Optional[str]:
        """Nothing is ever stored."""
        return None

    async def store_response(self, key: str, response: str, ttl_seconds: int) -> None:
        pass
