"""Unit tests for AssignLeadsToAgent use case."""

import pytest

from app.application.use_cases.assign_leads_to_agent import AssignLeadsToAgent
from app.domain.errors import NotFoundError


@pytest.fixture
def use_case(uow_factory):
    return AssignLeadsToAgent(uow_factory)


@pytest.mark.asyncio
async def test_reassignment_overwrites_agent(use_case, seed):
    """Test agents can be swapped freely, even on leads inside a campaign."""
    old_agent = seed.user(name="Old")
    new_agent = seed.user(name="New")
    campaign_id = seed.campaign()
    lead_ids = [
        seed.lead("5550101", assigned_to_id=old_agent, campaign_id=campaign_id),
        seed.lead("5550102"),
    ]

    result = await use_case.execute(lead_ids + ["missing"], new_agent)

    assert result.assigned == 2
    assert result.not_found == 1
    assert result.not_found_lead_ids == ["missing"]
    assert all(seed.get_lead(lead_id).assigned_to_id == new_agent for lead_id in lead_ids)
    assert seed.get_lead(lead_ids[0]).campaign_id == campaign_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role,status",
    [("SUPERVISOR", "ACTIVE"), ("AGENT", "INACTIVE"), ("AGENT", "PENDING")],
)
async def test_only_active_agents_receive_leads(use_case, seed, role, status):
    user_id = seed.user(role=role, status=status)
    lead_id = seed.lead("5550201")

    with pytest.raises(NotFoundError, match="Agent not found or not active"):
        await use_case.execute([lead_id], user_id)

    assert seed.get_lead(lead_id).assigned_to_id is None


@pytest.mark.asyncio
async def test_assign_one(use_case, seed):
    agent_id = seed.user()
    lead_id = seed.lead("5550301")

    view = await use_case.assign_one(lead_id, agent_id)

    assert view.assigned_to_id == agent_id


@pytest.mark.asyncio
async def test_assign_one_unknown_lead(use_case, seed):
    with pytest.raises(NotFoundError, match="Lead"):
        await use_case.assign_one("missing", seed.user())
