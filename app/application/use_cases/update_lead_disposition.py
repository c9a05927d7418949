"""Update lead disposition use case."""

from datetime import datetime, timezone
from typing import Callable, Optional

from app.application.dtos.lead import DispositionSelection, LeadView
from app.application.ports.disposition_catalog_repository import DispositionCatalogRepository
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.domain.errors import InvalidDispositionError, NotFoundError
from app.domain.value_objects.disposition_state import (
    DispositionState,
    build_disposition_state,
    check_reason_allowed,
    check_sale_status_allowed,
)
from app.infrastructure.logging.logger import log_disposition_update


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdateLeadDisposition:
    """Validate a call outcome against the disposition tree and record it."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize use case.

        Args:
            uow_factory: Unit of work factory
            clock: Source of the last_called_at timestamp
        """
        self._uow_factory = uow_factory
        self._clock = clock

    async def resolve_state(
        self,
        catalog: DispositionCatalogRepository,
        selection: DispositionSelection,
    ) -> DispositionState:
        """
        Resolve catalog ids and validate the combination.

        Checks run in this order: contact status exists, sale status exists and
        follows Contacted, a reason has a branch to hang from, the reason exists
        and its category matches that branch.

        Args:
            catalog: Disposition catalog repository
            selection: Candidate selection

        Returns:
            Validated disposition state

        Raises:
            InvalidDispositionError: If an id does not resolve to an active entry
            ValidationError: If the combination is not allowed
        """
        first = await catalog.get_first_level(selection.first_level_disposition_id)
        if first is None or not first.is_active:
            raise InvalidDispositionError("First", selection.first_level_disposition_id)

        second = None
        second_id = selection.second_level_disposition_id or None
        if second_id:
            second = await catalog.get_second_level(second_id)
            if second is None or not second.is_active:
                raise InvalidDispositionError("Second", second_id)
            check_sale_status_allowed(first)

        third = None
        third_id = selection.third_level_disposition_id or None
        if third_id:
            check_reason_allowed(first, second)
            third = await catalog.get_third_level(third_id)
            if third is None or not third.is_active:
                raise InvalidDispositionError("Third", third_id)

        return build_disposition_state(first, second, third)

    async def execute(
        self,
        lead_id: str,
        selection: DispositionSelection,
        request_id: Optional[str] = None,
    ) -> LeadView:
        """
        Record a disposition on a lead.

        Every successful write overwrites the previous selection and stamps
        last_called_at, including edits of an already dispositioned lead.

        Args:
            lead_id: Lead identifier
            selection: Candidate selection
            request_id: Request identifier for logging

        Returns:
            Updated lead

        Raises:
            NotFoundError: If the lead does not exist
            InvalidDispositionError: If a disposition id does not resolve
            ValidationError: If the combination is not allowed
        """
        async with self._uow_factory() as uow:
            lead = await uow.leads.get(lead_id)
            if lead is None:
                raise NotFoundError("Lead", lead_id)

            state = await self.resolve_state(uow.dispositions, selection)
            lead.record_disposition(state, selection.disposition_notes, called_at=self._clock())
            await uow.leads.save_disposition(lead)
            await uow.commit()

        log_disposition_update(
            request_id=request_id,
            lead_id=lead.id,
            state=type(state).__name__,
        )
        return LeadView.from_entity(lead)
