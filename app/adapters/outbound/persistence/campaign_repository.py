"""SQLAlchemy-backed campaign repository adapter."""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.application.ports.campaign_repository import CampaignRepository
from app.domain.entities.campaign import Campaign
from app.domain.errors import NotFoundError

from .models import CampaignModel


class SqlAlchemyCampaignRepository(CampaignRepository):
    """SQLAlchemy implementation of campaign repository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _model_to_entity(self, model: CampaignModel) -> Campaign:
        return Campaign(
            id=model.id,
            campaign_name=model.campaign_name,
            is_active=bool(model.is_active),
            lead_count=model.lead_count,
            assigned_to_id=model.assigned_to_id,
            organization_name=model.organization_name,
            created_by_id=model.created_by_id,
        )

    async def get(self, campaign_id: str) -> Optional[Campaign]:
        model = self._session.get(CampaignModel, campaign_id)
        if model is None:
            return None
        return self._model_to_entity(model)

    async def increment_lead_count(self, campaign_id: str, amount: int) -> None:
        """
        Relative increment of the campaign lead counter.

        Args:
            campaign_id: Campaign identifier
            amount: Number of leads added (no-op when not positive)

        Raises:
            NotFoundError: If the campaign row does not exist
        """
        if amount <= 0:
            return
        result = self._session.execute(
            update(CampaignModel)
            .where(CampaignModel.id == campaign_id)
            .values(lead_count=CampaignModel.lead_count + amount)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            raise NotFoundError("Campaign", campaign_id)
