"""Lead pool creation and read models."""

import math
from typing import Optional
from uuid import uuid4

from app.application.dtos.lead import LeadView
from app.application.dtos.pool import LeadPoolView, PoolLeadsPage
from app.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from app.domain.entities.lead_pool import LeadPool
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.logging.logger import log_operation

MAX_PAGE_SIZE = 500


class ManageLeadPools:
    """Create pools and report on their progress."""

    def __init__(self, uow_factory: UnitOfWorkFactory, page_size: int = 50) -> None:
        self._uow_factory = uow_factory
        self._page_size = page_size

    async def _to_view(self, uow: UnitOfWork, pool: LeadPool) -> LeadPoolView:
        campaign = await uow.campaigns.get(pool.campaign_id)
        return LeadPoolView(
            id=pool.id,
            name=pool.name,
            campaign_id=pool.campaign_id,
            campaign_name=campaign.campaign_name if campaign else None,
            created_by_id=pool.created_by_id,
            created_at=pool.created_at,
            updated_at=pool.updated_at,
            stats=await uow.leads.pool_stats(pool.id),
        )

    async def create_pool(
        self,
        name: str,
        campaign_id: str,
        actor_id: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> LeadPoolView:
        """
        Create an empty pool scoped to a campaign.

        Raises:
            ValidationError: If the name is blank
            NotFoundError: If the campaign does not exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Pool name is required", field="name")

        async with self._uow_factory() as uow:
            if await uow.campaigns.get(campaign_id) is None:
                raise NotFoundError("Campaign", campaign_id)
            pool = LeadPool(
                id=str(uuid4()),
                name=name,
                campaign_id=campaign_id,
                created_by_id=actor_id,
            )
            await uow.pools.add(pool)
            view = await self._to_view(uow, pool)
            await uow.commit()

        log_operation(
            operation="create_pool",
            request_id=request_id,
            component="pool",
            pool_id=pool.id,
            campaign_id=campaign_id,
        )
        return view

    async def get_pool(self, pool_id: str) -> LeadPoolView:
        async with self._uow_factory() as uow:
            pool = await uow.pools.get(pool_id)
            if pool is None:
                raise NotFoundError("Lead pool", pool_id)
            return await self._to_view(uow, pool)

    async def list_pools(self) -> list[LeadPoolView]:
        async with self._uow_factory() as uow:
            return [await self._to_view(uow, pool) for pool in await uow.pools.list()]

    async def list_pool_leads(
        self,
        pool_id: str,
        page: int = 1,
        limit: Optional[int] = None,
        show_all: bool = False,
    ) -> PoolLeadsPage:
        """
        Page through a pool's leads, newest first.

        Args:
            pool_id: Pool identifier
            page: 1-based page number
            limit: Page size (defaults to the configured size)
            show_all: Include leads that already have an agent

        Raises:
            NotFoundError: If the pool does not exist
        """
        page = max(1, page)
        limit = min(max(1, limit or self._page_size), MAX_PAGE_SIZE)

        async with self._uow_factory() as uow:
            if await uow.pools.get(pool_id) is None:
                raise NotFoundError("Lead pool", pool_id)
            leads, total = await uow.leads.list_pool_leads(
                pool_id,
                unassigned_only=not show_all,
                offset=(page - 1) * limit,
                limit=limit,
            )

        return PoolLeadsPage(
            data=[LeadView.from_entity(lead) for lead in leads],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )
