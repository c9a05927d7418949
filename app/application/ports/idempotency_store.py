"""Idempotency store port."""

from abc import ABC, abstractmethod
from typing import Optional


class IdempotencyStore(ABC):
    """Port interface for replaying responses of repeated bulk requests."""

    @abstractmethod
    async def reserve(self, key: str, ttl_seconds: int) -> bool:
        """
        Claim an idempotency key before processing a request.

        Args:
            key: Caller supplied Idempotency-Key, scoped by operation
            ttl_seconds: Time-to-live in seconds

        Returns:
            True if this caller claimed the key, False if it was already claimed
        """
        pass

    @abstractmethod
    async def release(self, key: str) -> None:
        """
        Drop a claim whose request failed, so the caller may retry.

        Args:
            key: Idempotency key
        """
        pass

    @abstractmethod
    async def get_response(self, key: str) -> Optional[str]:
        """
        Get the stored response for a key.

        Args:
            key: Idempotency key

        Returns:
            Serialized response, or None if nothing was stored yet
        """
        pass

    @abstractmethod
    async def store_response(self, key: str, response: str, ttl_seconds: int) -> None:
        """
        Store the response for a key with a TTL.

        Args:
            key: Idempotency key
            response: Serialized response body
            ttl_seconds: Time-to-live in seconds
        """
        pass
