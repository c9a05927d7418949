"""Disposition catalog repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.disposition import (
    FirstLevelDisposition,
    ReasonCategory,
    SecondLevelDisposition,
    ThirdLevelDisposition,
)


class DispositionCatalogRepository(ABC):
    """Port interface for the three disposition catalogs."""

    @abstractmethod
    async def get_first_level(self, disposition_id: str) -> Optional[FirstLevelDisposition]:
        pass

    @abstractmethod
    async def get_second_level(self, disposition_id: str) -> Optional[SecondLevelDisposition]:
        pass

    @abstractmethod
    async def get_third_level(self, disposition_id: str) -> Optional[ThirdLevelDisposition]:
        pass

    @abstractmethod
    async def list_first_level(self, active_only: bool = False) -> list[FirstLevelDisposition]:
        pass

    @abstractmethod
    async def list_second_level(self, active_only: bool = False) -> list[SecondLevelDisposition]:
        pass

    @abstractmethod
    async def list_third_level(
        self,
        category: Optional[ReasonCategory] = None,
        active_only: bool = False,
    ) -> list[ThirdLevelDisposition]:
        """
        List reasons ordered by category then name.

        Args:
            category: Optional category filter
            active_only: Skip inactive entries
        """
        pass
