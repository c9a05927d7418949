"""Lead DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO
from app.domain.entities.lead import Lead


class LeadView(DTO):
    """Lead as returned to callers."""

    id: str
    full_name: str
    phone_number: str
    sector_id: Optional[str] = None
    product_ids: list[str] = Field(default_factory=list)
    campaign_id: Optional[str] = None
    assigned_to_id: Optional[str] = None
    lead_pool_id: Optional[str] = None
    first_level_disposition_id: Optional[str] = None
    second_level_disposition_id: Optional[str] = None
    third_level_disposition_id: Optional[str] = None
    disposition_notes: Optional[str] = None
    last_called_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, lead: Lead) -> "LeadView":
        return cls(
            id=lead.id,
            full_name=lead.full_name,
            phone_number=lead.phone_number,
            sector_id=lead.sector_id,
            product_ids=list(lead.product_ids),
            campaign_id=lead.campaign_id,
            assigned_to_id=lead.assigned_to_id,
            lead_pool_id=lead.lead_pool_id,
            first_level_disposition_id=lead.first_level_disposition_id,
            second_level_disposition_id=lead.second_level_disposition_id,
            third_level_disposition_id=lead.third_level_disposition_id,
            disposition_notes=lead.disposition_notes,
            last_called_at=lead.last_called_at,
            created_at=lead.created_at,
        )


class DispositionSelection(DTO):
    """Candidate call outcome for a lead."""

    first_level_disposition_id: str = Field(..., min_length=1)
    second_level_disposition_id: Optional[str] = None
    third_level_disposition_id: Optional[str] = None
    disposition_notes: Optional[str] = None


class NewLead(DTO):
    """Input for creating a single lead."""

    full_name: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)
    sector_id: Optional[str] = None
    product_ids: list[str] = Field(default_factory=list)
    campaign_id: Optional[str] = None
