"""Unit of work port."""

from abc import ABC, abstractmethod
from typing import Callable

from app.application.ports.campaign_repository import CampaignRepository
from app.application.ports.disposition_catalog_repository import DispositionCatalogRepository
from app.application.ports.lead_pool_repository import LeadPoolRepository
from app.application.ports.lead_repository import LeadRepository
from app.application.ports.reference_data_repository import ReferenceDataRepository
from app.application.ports.user_repository import UserRepository


class UnitOfWork(ABC):
    """
    One transaction spanning every repository.

    Usage::

        async with uow_factory() as uow:
            ...
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    leads: LeadRepository
    campaigns: CampaignRepository
    pools: LeadPoolRepository
    dispositions: DispositionCatalogRepository
    reference_data: ReferenceDataRepository
    users: UserRepository

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.rollback()

    @abstractmethod
    async def commit(self) -> None:
        """
        Commit the transaction.

        Raises:
            StorageError: If the storage layer rejects the commit
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass


UnitOfWorkFactory = Callable[[], UnitOfWork]
