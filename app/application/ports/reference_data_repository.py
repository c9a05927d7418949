"""Sector and product repository port."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from app.domain.entities.reference_data import Product, Sector


class ReferenceDataRepository(ABC):
    """Port interface for sectors and products."""

    @abstractmethod
    async def list_sectors(self) -> list[Sector]:
        """List sectors, oldest first."""
        pass

    @abstractmethod
    async def list_products(self) -> list[Product]:
        pass

    @abstractmethod
    async def get_sector(self, sector_id: str) -> Optional[Sector]:
        pass

    @abstractmethod
    async def get_products(self, product_ids: Iterable[str]) -> list[Product]:
        """Return the products found among product_ids."""
        pass
