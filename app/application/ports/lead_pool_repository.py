"""Lead pool repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.lead_pool import LeadPool


class LeadPoolRepository(ABC):
    """Port interface for lead pool repository."""

    @abstractmethod
    async def get(self, pool_id: str) -> Optional[LeadPool]:
        pass

    @abstractmethod
    async def add(self, pool: LeadPool) -> None:
        pass

    @abstractmethod
    async def list(self) -> list[LeadPool]:
        """List all pools, newest first."""
        pass
