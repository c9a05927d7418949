"""Create lead use case (public submission and agent quick entry)."""

from typing import Optional
from uuid import uuid4

from app.application.dtos.lead import LeadView, NewLead
from app.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from app.application.use_cases.reference_matching import pick_default_sector
from app.domain.entities.lead import Lead
from app.domain.errors import DuplicateLeadError, NotFoundError, ValidationError
from app.domain.value_objects.phone_number import PhoneNumber
from app.infrastructure.logging.logger import log_operation


class CreateLead:
    """Create a single lead after the duplicate pre-check."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        default_sector_name: Optional[str] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._default_sector_name = default_sector_name

    async def _duplicate_location(self, uow: UnitOfWork, existing: Lead) -> str:
        if existing.is_direct:
            return "as a direct lead"
        campaign = await uow.campaigns.get(existing.campaign_id)
        name = campaign.campaign_name if campaign else existing.campaign_id
        return f'in the "{name}" campaign'

    async def _resolve_sector_id(self, uow: UnitOfWork, sector_id: Optional[str]) -> str:
        if sector_id:
            sector = await uow.reference_data.get_sector(sector_id)
            if sector is None:
                raise NotFoundError("Business sector", sector_id)
            return sector.id
        sectors = await uow.reference_data.list_sectors()
        return pick_default_sector(sectors, self._default_sector_name).id

    async def execute(
        self,
        new_lead: NewLead,
        actor_id: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> LeadView:
        """
        Create a lead.

        When the lead joins a campaign the campaign counter is incremented in the
        same transaction. The agent is the acting user when given, otherwise the
        campaign's default assignee.

        Args:
            new_lead: Lead input
            actor_id: Authenticated user creating the lead (quick entry)
            request_id: Request identifier for logging

        Returns:
            Created lead

        Raises:
            ValidationError: If name, phone or product ids are invalid
            NotFoundError: If the campaign or sector does not exist
            DuplicateLeadError: If the phone number is taken (pre-check or constraint)
        """
        full_name = new_lead.full_name.strip()
        if not full_name:
            raise ValidationError("Name is required", field="full_name")
        try:
            phone_number = PhoneNumber.parse(new_lead.phone_number).value
        except ValueError as e:
            raise ValidationError("Phone number is required", field="phone_number") from e

        async with self._uow_factory() as uow:
            existing = await uow.leads.find_by_phone_number(phone_number)
            if existing is not None:
                location = await self._duplicate_location(uow, existing)
                raise DuplicateLeadError(phone_number, location)

            campaign = None
            if new_lead.campaign_id:
                campaign = await uow.campaigns.get(new_lead.campaign_id)
                if campaign is None:
                    raise NotFoundError("Campaign", new_lead.campaign_id)

            sector_id = await self._resolve_sector_id(uow, new_lead.sector_id)

            product_ids = list(dict.fromkeys(new_lead.product_ids))
            products = await uow.reference_data.get_products(product_ids)
            if len(products) != len(product_ids):
                raise ValidationError("One or more product IDs are invalid", field="product_ids")

            assigned_to_id = actor_id or (campaign.assigned_to_id if campaign else None)
            lead = Lead(
                id=str(uuid4()),
                full_name=full_name,
                phone_number=phone_number,
                sector_id=sector_id,
                product_ids=product_ids,
                campaign_id=campaign.id if campaign else None,
                assigned_to_id=assigned_to_id,
            )
            await uow.leads.add(lead)
            if campaign is not None:
                await uow.campaigns.increment_lead_count(campaign.id, 1)
            await uow.commit()

        log_operation(
            operation="create_lead",
            request_id=request_id,
            component="lead",
            lead_id=lead.id,
            campaign_id=lead.campaign_id,
        )
        return LeadView.from_entity(lead)

    async def add_to_campaign(
        self,
        campaign_id: str,
        new_lead: NewLead,
        actor_id: Optional[str],
        request_id: Optional[str] = None,
    ) -> LeadView:
        """Agent quick entry: create a lead directly inside a campaign."""
        return await self.execute(
            new_lead.model_copy(update={"campaign_id": campaign_id}),
            actor_id=actor_id,
            request_id=request_id,
        )
