"""Duplicate lead detection by phone number."""

from typing import Iterable

from app.application.ports.lead_repository import LeadRepository
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.domain.value_objects.phone_number import normalize_phone_number


class DuplicateDetector:
    """
    Advisory pre-check against stored phone numbers.

    Runs inside the caller's transaction. It does not replace the unique constraint
    on leads.phone_number: two requests can both pass the check, and the insert that
    loses the race is rejected by storage (DuplicateLeadError for a single lead, a
    skipped row for a bulk import).
    """

    def __init__(self, leads: LeadRepository) -> None:
        self._leads = leads

    async def exists(self, phone_number: str) -> bool:
        """
        Check whether a lead already owns this phone number.

        Args:
            phone_number: Raw phone number (normalized here)

        Returns:
            True if a lead with the normalized number exists
        """
        normalized = normalize_phone_number(phone_number)
        if not normalized:
            return False
        return await self._leads.find_by_phone_number(normalized) is not None

    async def bulk_exists(self, phone_numbers: Iterable[str]) -> set[str]:
        """
        Check a batch of phone numbers.

        Args:
            phone_numbers: Raw phone numbers (normalized here)

        Returns:
            Normalized phone numbers that already belong to a lead
        """
        normalized = [normalize_phone_number(phone) for phone in phone_numbers]
        return await self._leads.existing_phone_numbers(phone for phone in normalized if phone)


class CheckDuplicateLead:
    """Use case behind the CheckDuplicate operation."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def exists(self, phone_number: str) -> bool:
        async with self._uow_factory() as uow:
            return await DuplicateDetector(uow.leads).exists(phone_number)

    async def bulk_exists(self, phone_numbers: Iterable[str]) -> set[str]:
        async with self._uow_factory() as uow:
            return await DuplicateDetector(uow.leads).bulk_exists(phone_numbers)
