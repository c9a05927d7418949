"""Assign leads to a campaign use case."""

from typing import Optional

from app.application.dtos.assignment import CampaignAssignmentResult, SkippedLead
from app.application.dtos.lead import LeadView
from app.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from app.domain.entities.campaign import Campaign
from app.domain.entities.lead import Lead
from app.domain.errors import (
    InactiveCampaignError,
    LeadAlreadyAssignedError,
    NotFoundError,
    ValidationError,
)
from app.infrastructure.logging.logger import log_assignment


class AssignLeadsToCampaign:
    """
    Put leads into a campaign.

    A lead joins a campaign at most once. Joining sets the lead's agent to the
    campaign's default assignee and adds to the campaign lead counter in the same
    transaction as the lead updates.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def _get_active_campaign(self, uow: UnitOfWork, campaign_id: str) -> Campaign:
        campaign = await uow.campaigns.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        if not campaign.is_active:
            raise InactiveCampaignError(campaign_id)
        return campaign

    async def _campaign_name(self, uow: UnitOfWork, campaign_id: Optional[str]) -> Optional[str]:
        if campaign_id is None:
            return None
        campaign = await uow.campaigns.get(campaign_id)
        return campaign.campaign_name if campaign else None

    async def assign_one(
        self,
        lead_id: str,
        campaign_id: str,
        request_id: Optional[str] = None,
    ) -> LeadView:
        """
        Assign a single lead.

        Args:
            lead_id: Lead identifier
            campaign_id: Target campaign

        Returns:
            Updated lead

        Raises:
            NotFoundError: If the lead or campaign does not exist
            LeadAlreadyAssignedError: If the lead already has a campaign
            InactiveCampaignError: If the campaign is inactive
        """
        async with self._uow_factory() as uow:
            lead = await uow.leads.get(lead_id)
            if lead is None:
                raise NotFoundError("Lead", lead_id)
            if lead.campaign_id is not None:
                raise LeadAlreadyAssignedError(
                    lead.id, await self._campaign_name(uow, lead.campaign_id)
                )

            campaign = await self._get_active_campaign(uow, campaign_id)

            assigned = await uow.leads.assign_campaign(
                [lead.id], campaign.id, campaign.assigned_to_id
            )
            if not assigned:
                # Claimed by a concurrent request since it was read
                current = await uow.leads.get(lead.id)
                raise LeadAlreadyAssignedError(
                    lead.id,
                    await self._campaign_name(uow, current.campaign_id if current else None),
                )

            await uow.campaigns.increment_lead_count(campaign.id, len(assigned))
            updated = await uow.leads.get(lead.id)
            await uow.commit()

        log_assignment(request_id, "campaign", campaign.id, assigned=1, lead_id=lead.id)
        return LeadView.from_entity(updated)

    async def assign_many(
        self,
        lead_ids: list[str],
        campaign_id: str,
        request_id: Optional[str] = None,
    ) -> CampaignAssignmentResult:
        """
        Assign several leads, skipping the ones that already have a campaign.

        A missing or inactive campaign fails the whole request; leads that are
        unknown or already assigned are only reported.

        Args:
            lead_ids: Lead identifiers
            campaign_id: Target campaign

        Returns:
            Counts and details for assigned, skipped and unknown leads

        Raises:
            ValidationError: If no lead id is given
            NotFoundError: If the campaign does not exist
            InactiveCampaignError: If the campaign is inactive
        """
        ids = list(dict.fromkeys(lead_ids))
        if not ids:
            raise ValidationError("At least one lead is required", field="lead_ids")

        async with self._uow_factory() as uow:
            campaign = await self._get_active_campaign(uow, campaign_id)

            found = {lead.id: lead for lead in await uow.leads.get_many(ids)}
            not_found_ids = [lead_id for lead_id in ids if lead_id not in found]
            already_assigned: list[Lead] = [
                found[lead_id]
                for lead_id in ids
                if lead_id in found and found[lead_id].campaign_id is not None
            ]
            assignable = [
                lead_id
                for lead_id in ids
                if lead_id in found and found[lead_id].campaign_id is None
            ]

            assigned_ids: list[str] = []
            if assignable:
                assigned_ids = await uow.leads.assign_campaign(
                    assignable, campaign.id, campaign.assigned_to_id
                )
                lost = set(assignable) - set(assigned_ids)
                if lost:
                    already_assigned.extend(await uow.leads.get_many(lost))

            await uow.campaigns.increment_lead_count(campaign.id, len(assigned_ids))

            skipped_leads = [
                SkippedLead(
                    id=lead.id,
                    name=lead.full_name,
                    existing_campaign=await self._campaign_name(uow, lead.campaign_id),
                )
                for lead in already_assigned
            ]
            await uow.commit()

        result = CampaignAssignmentResult(
            campaign_id=campaign.id,
            assigned=len(assigned_ids),
            skipped=len(skipped_leads),
            not_found=len(not_found_ids),
            assigned_lead_ids=assigned_ids,
            skipped_leads=skipped_leads,
            not_found_lead_ids=not_found_ids,
        )
        log_assignment(
            request_id,
            "campaign",
            campaign.id,
            assigned=result.assigned,
            skipped=result.skipped,
            not_found=result.not_found,
        )
        return result
