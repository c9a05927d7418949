"""Lead repository port."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from app.application.dtos.pool import PoolStats
from app.domain.entities.lead import Lead


class LeadRepository(ABC):
    """Port interface for lead repository."""

    @abstractmethod
    async def get(self, lead_id: str) -> Optional[Lead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        pass

    @abstractmethod
    async def get_many(self, lead_ids: Iterable[str]) -> list[Lead]:
        """
        Get every lead whose id is in lead_ids; unknown ids are ignored.

        Args:
            lead_ids: Lead identifiers

        Returns:
            Found leads (order not guaranteed)
        """
        pass

    @abstractmethod
    async def find_by_phone_number(self, phone_number: str) -> Optional[Lead]:
        """
        Get the lead owning a normalized phone number.

        Args:
            phone_number: Normalized phone number

        Returns:
            Lead entity, or None if no lead has this number
        """
        pass

    @abstractmethod
    async def existing_phone_numbers(self, phone_numbers: Iterable[str]) -> set[str]:
        """
        Return the subset of phone_numbers already stored.

        Args:
            phone_numbers: Normalized phone numbers

        Returns:
            Phone numbers that belong to an existing lead
        """
        pass

    @abstractmethod
    async def add(self, lead: Lead) -> None:
        """
        Insert a lead.

        Raises:
            DuplicateLeadError: If the phone number is already stored
        """
        pass

    @abstractmethod
    async def add_many(self, leads: list[Lead]) -> list[Lead]:
        """
        Insert several leads in the current transaction.

        Leads whose phone number is already stored are skipped, not fatal.

        Returns:
            The leads actually inserted
        """
        pass

    @abstractmethod
    async def save_disposition(self, lead: Lead) -> None:
        """Persist the disposition fields and last_called_at of a lead."""
        pass

    @abstractmethod
    async def assign_campaign(
        self,
        lead_ids: list[str],
        campaign_id: str,
        assigned_to_id: Optional[str],
    ) -> list[str]:
        """
        Set campaign and agent on leads that have no campaign yet.

        Args:
            lead_ids: Candidate lead identifiers
            campaign_id: Target campaign
            assigned_to_id: Campaign default assignee

        Returns:
            Ids of the leads actually updated
        """
        pass

    @abstractmethod
    async def assign_agent(self, lead_ids: list[str], agent_id: str) -> int:
        """
        Overwrite the agent of the given leads.

        Returns:
            Number of leads updated
        """
        pass

    @abstractmethod
    async def assign_unassigned_pool_leads(
        self,
        pool_id: str,
        lead_ids: list[str],
        agent_id: str,
    ) -> int:
        """
        Set the agent on pooled leads that have no agent yet.

        Returns:
            Number of leads updated
        """
        pass

    @abstractmethod
    async def list_pool_leads(
        self,
        pool_id: str,
        unassigned_only: bool,
        offset: int,
        limit: int,
    ) -> tuple[list[Lead], int]:
        """
        Page through a pool, newest first.

        Returns:
            Tuple of (leads on the page, total matching leads)
        """
        pass

    @abstractmethod
    async def pool_stats(self, pool_id: str) -> PoolStats:
        """Aggregate assignment and call progress for a pool."""
        pass

    @abstractmethod
    async def count_by_campaign(self, campaign_id: str) -> int:
        """Count leads referencing a campaign."""
        pass
