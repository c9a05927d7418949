"""Campaign repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.campaign import Campaign


class CampaignRepository(ABC):
    """Port interface for campaign repository."""

    @abstractmethod
    async def get(self, campaign_id: str) -> Optional[Campaign]:
        """
        Get a campaign by id.

        Args:
            campaign_id: Campaign identifier

        Returns:
            Campaign entity, or None if not found
        """
        pass

    @abstractmethod
    async def increment_lead_count(self, campaign_id: str, amount: int) -> None:
        """
        Add amount to the campaign lead counter.

        The write is relative (lead_count = lead_count + amount) and joins the
        current transaction, so it commits or rolls back with the lead writes.

        Args:
            campaign_id: Campaign identifier
            amount: Number of leads that joined the campaign
        """
        pass
