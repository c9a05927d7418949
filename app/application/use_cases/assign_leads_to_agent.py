"""Assign leads to an agent use case."""

from typing import Optional

from app.application.dtos.assignment import AgentAssignmentResult
from app.application.dtos.lead import LeadView
from app.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from app.domain.entities.user import User
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.logging.logger import log_assignment


async def get_assignable_agent(uow: UnitOfWork, agent_id: str) -> User:
    """
    Load an agent that may receive leads.

    Raises:
        NotFoundError: If the user is missing, not an agent, or not active
    """
    agent = await uow.users.get(agent_id)
    if agent is None or not agent.can_receive_leads():
        raise NotFoundError("Agent not found or not active")
    return agent


class AssignLeadsToAgent:
    """Overwrite the agent of leads; no uniqueness constraint applies."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def execute(
        self,
        lead_ids: list[str],
        agent_id: str,
        request_id: Optional[str] = None,
    ) -> AgentAssignmentResult:
        ids = list(dict.fromkeys(lead_ids))
        if not ids:
            raise ValidationError("At least one lead is required", field="lead_ids")

        async with self._uow_factory() as uow:
            await get_assignable_agent(uow, agent_id)
            found_ids = {lead.id for lead in await uow.leads.get_many(ids)}
            not_found_ids = [lead_id for lead_id in ids if lead_id not in found_ids]
            assigned = await uow.leads.assign_agent(
                [lead_id for lead_id in ids if lead_id in found_ids], agent_id
            )
            await uow.commit()

        log_assignment(
            request_id, "agent", agent_id, assigned=assigned, not_found=len(not_found_ids)
        )
        return AgentAssignmentResult(
            agent_id=agent_id,
            assigned=assigned,
            not_found=len(not_found_ids),
            not_found_lead_ids=not_found_ids,
        )

    async def assign_one(
        self,
        lead_id: str,
        agent_id: str,
        request_id: Optional[str] = None,
    ) -> LeadView:
        """
        Reassign a single lead.

        Raises:
            NotFoundError: If the lead or the agent does not exist
        """
        async with self._uow_factory() as uow:
            await get_assignable_agent(uow, agent_id)
            if await uow.leads.get(lead_id) is None:
                raise NotFoundError("Lead", lead_id)
            await uow.leads.assign_agent([lead_id], agent_id)
            lead = await uow.leads.get(lead_id)
            await uow.commit()

        log_assignment(request_id, "agent", agent_id, assigned=1, lead_id=lead_id)
        return LeadView.from_entity(lead)
