"""Distribute pooled leads to an agent."""

from typing import Optional

from app.application.dtos.pool import DistributionResult
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.use_cases.assign_leads_to_agent import get_assignable_agent
from app.domain.errors import AlreadyAssignedError, NotFoundError, ValidationError
from app.infrastructure.logging.logger import log_assignment


class DistributePoolLeads:
    """
    Hand a chosen subset of unassigned pool leads to one agent.

    The request is all or nothing: a lead outside the pool or one that already has
    an agent rejects the whole batch.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def execute(
        self,
        pool_id: str,
        lead_ids: list[str],
        agent_id: str,
        request_id: Optional[str] = None,
    ) -> DistributionResult:
        """
        Distribute leads.

        Args:
            pool_id: Pool the leads were staged in
            lead_ids: Leads to hand out
            agent_id: Receiving agent

        Returns:
            Number of leads updated and the receiving agent

        Raises:
            NotFoundError: If the pool or agent does not exist
            ValidationError: If a lead does not belong to the pool
            AlreadyAssignedError: If a lead already has an agent
        """
        ids = list(dict.fromkeys(lead_ids))
        if not ids:
            raise ValidationError("At least one lead is required", field="lead_ids")

        async with self._uow_factory() as uow:
            pool = await uow.pools.get(pool_id)
            if pool is None:
                raise NotFoundError("Lead pool", pool_id)

            agent = await get_assignable_agent(uow, agent_id)

            leads = await uow.leads.get_many(ids)
            if len(leads) != len(ids) or any(lead.lead_pool_id != pool.id for lead in leads):
                raise ValidationError("Some leads do not belong to this pool", field="lead_ids")

            already = [lead for lead in leads if lead.assigned_to_id is not None]
            if already:
                raise AlreadyAssignedError(len(already))

            updated = await uow.leads.assign_unassigned_pool_leads(pool.id, ids, agent.id)
            if updated != len(ids):
                # Lost a race with another distribution; nothing is committed
                raise AlreadyAssignedError(len(ids) - updated)
            await uow.commit()

        log_assignment(request_id, "pool_distribution", agent.id, assigned=updated, pool_id=pool.id)
        return DistributionResult(
            pool_id=pool.id,
            agent_id=agent.id,
            agent_name=agent.name,
            count=updated,
        )
