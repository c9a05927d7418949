"""Assignment DTOs."""

from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO


class SkippedLead(DTO):
    """Lead left untouched because it already has a campaign."""

    id: str
    name: str
    existing_campaign: Optional[str] = None


class CampaignAssignmentResult(DTO):
    """Outcome of a bulk campaign assignment."""

    campaign_id: str
    assigned: int
    skipped: int
    not_found: int
    assigned_lead_ids: list[str] = Field(default_factory=list)
    skipped_leads: list[SkippedLead] = Field(default_factory=list)
    not_found_lead_ids: list[str] = Field(default_factory=list)


class AgentAssignmentResult(DTO):
    """Outcome of a direct agent assignment."""

    agent_id: str
    assigned: int
    not_found: int
    not_found_lead_ids: list[str] = Field(default_factory=list)
