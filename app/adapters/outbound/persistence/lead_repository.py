"""SQLAlchemy-backed lead repository adapter."""

from typing import Iterable, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.dtos.pool import PoolStats
from app.application.ports.lead_repository import LeadRepository
from app.domain.entities.disposition import CONTACTED, SALE
from app.domain.entities.lead import Lead
from app.domain.errors import DuplicateLeadError, StorageError
from app.infrastructure.logging.logger import logger

from .models import (
    FirstLevelDispositionModel,
    LeadModel,
    ProductModel,
    SecondLevelDispositionModel,
    as_utc,
)

DEFAULT_CHUNK_SIZE = 500


def _chunks(values: list[str], size: int) -> Iterable[list[str]]:
    for start in range(0, len(values), size):
        yield values[start : start + size]


class SqlAlchemyLeadRepository(LeadRepository):
    """SQLAlchemy implementation of lead repository."""

    def __init__(self, session: Session, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Initialize repository.

        Args:
            session: Session owned by the unit of work
            chunk_size: Maximum number of values per IN (...) clause
        """
        self._session = session
        self._chunk_size = max(1, chunk_size)

    def _model_to_entity(self, model: LeadModel) -> Lead:
        """
        Convert LeadModel to Lead entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            Lead entity
        """
        return Lead(
            id=model.id,
            full_name=model.full_name,
            phone_number=model.phone_number,
            sector_id=model.sector_id,
            product_ids=[product.id for product in model.products],
            campaign_id=model.campaign_id,
            assigned_to_id=model.assigned_to_id,
            lead_pool_id=model.lead_pool_id,
            first_level_disposition_id=model.first_level_disposition_id,
            second_level_disposition_id=model.second_level_disposition_id,
            third_level_disposition_id=model.third_level_disposition_id,
            disposition_notes=model.disposition_notes,
            last_called_at=as_utc(model.last_called_at),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _entity_to_model(self, lead: Lead) -> LeadModel:
        """
        Convert Lead entity to a new LeadModel.

        Args:
            lead: Lead entity

        Returns:
            LeadModel instance ready to be added to the session
        """
        model = LeadModel(
            id=lead.id,
            full_name=lead.full_name,
            phone_number=lead.phone_number,
            sector_id=lead.sector_id,
            campaign_id=lead.campaign_id,
            assigned_to_id=lead.assigned_to_id,
            lead_pool_id=lead.lead_pool_id,
            first_level_disposition_id=lead.first_level_disposition_id,
            second_level_disposition_id=lead.second_level_disposition_id,
            third_level_disposition_id=lead.third_level_disposition_id,
            disposition_notes=lead.disposition_notes,
            last_called_at=lead.last_called_at,
            created_at=lead.created_at,
            updated_at=lead.updated_at,
        )
        if lead.product_ids:
            model.products = list(
                self._session.scalars(
                    select(ProductModel).where(ProductModel.id.in_(lead.product_ids))
                ).all()
            )
        return model

    def _check_integrity_error(self, error: IntegrityError) -> None:
        """Raise StorageError unless the phone number unique constraint fired."""
        if "phone_number" not in str(error.orig).lower():
            logger.error(f"Integrity error while inserting leads: {str(error)}")
            raise StorageError() from error

    async def get(self, lead_id: str) -> Optional[Lead]:
        model = self._session.get(LeadModel, lead_id)
        if model is None:
            return None
        return self._model_to_entity(model)

    async def get_many(self, lead_ids: Iterable[str]) -> list[Lead]:
        ids = list(dict.fromkeys(lead_ids))
        leads: list[Lead] = []
        for chunk in _chunks(ids, self._chunk_size):
            models = self._session.scalars(select(LeadModel).where(LeadModel.id.in_(chunk))).all()
            leads.extend(self._model_to_entity(model) for model in models)
        return leads

    async def find_by_phone_number(self, phone_number: str) -> Optional[Lead]:
        model = self._session.scalars(
            select(LeadModel).where(LeadModel.phone_number == phone_number)
        ).first()
        if model is None:
            return None
        return self._model_to_entity(model)

    async def existing_phone_numbers(self, phone_numbers: Iterable[str]) -> set[str]:
        """
        Look up phone numbers in chunks.

        Args:
            phone_numbers: Normalized phone numbers

        Returns:
            The phone numbers already owned by a lead
        """
        candidates = [phone for phone in dict.fromkeys(phone_numbers) if phone]
        found: set[str] = set()
        for chunk in _chunks(candidates, self._chunk_size):
            found.update(
                self._session.scalars(
                    select(LeadModel.phone_number).where(LeadModel.phone_number.in_(chunk))
                ).all()
            )
        return found

    async def add(self, lead: Lead) -> None:
        self._session.add(self._entity_to_model(lead))
        try:
            self._session.flush()
        except IntegrityError as e:
            self._check_integrity_error(e)
            logger.warning(f"Phone number unique constraint rejected insert: {lead.phone_number!r}")
            raise DuplicateLeadError(lead.phone_number) from e

    async def add_many(self, leads: list[Lead]) -> list[Lead]:
        """
        Insert leads one savepoint at a time.

        A lead whose phone number is already stored when it is flushed is skipped;
        the rest of the batch stays in the transaction.

        Returns:
            The leads actually inserted
        """
        created: list[Lead] = []
        for lead in leads:
            model = self._entity_to_model(lead)
            try:
                with self._session.begin_nested():
                    self._session.add(model)
            except IntegrityError as e:
                self._check_integrity_error(e)
                logger.warning(f"Phone number taken during insert, skipped: {lead.phone_number!r}")
                continue
            created.append(lead)
        return created

    async def save_disposition(self, lead: Lead) -> None:
        self._session.execute(
            update(LeadModel)
            .where(LeadModel.id == lead.id)
            .values(
                first_level_disposition_id=lead.first_level_disposition_id,
                second_level_disposition_id=lead.second_level_disposition_id,
                third_level_disposition_id=lead.third_level_disposition_id,
                disposition_notes=lead.disposition_notes,
                last_called_at=lead.last_called_at,
                updated_at=lead.updated_at,
            )
            .execution_options(synchronize_session="fetch")
        )

    async def assign_campaign(
        self,
        lead_ids: list[str],
        campaign_id: str,
        assigned_to_id: Optional[str],
    ) -> list[str]:
        """
        Assign leads without a campaign; leads that already have one are left alone.

        The candidate rows are locked first (FOR UPDATE where supported) and the
        UPDATE repeats the campaign_id IS NULL guard, so concurrent requests cannot
        both claim the same lead.
        """
        assigned: list[str] = []
        for chunk in _chunks(list(dict.fromkeys(lead_ids)), self._chunk_size):
            claimable = list(
                self._session.scalars(
                    select(LeadModel.id)
                    .where(LeadModel.id.in_(chunk), LeadModel.campaign_id.is_(None))
                    .with_for_update()
                ).all()
            )
            if not claimable:
                continue
            self._session.execute(
                update(LeadModel)
                .where(LeadModel.id.in_(claimable), LeadModel.campaign_id.is_(None))
                .values(campaign_id=campaign_id, assigned_to_id=assigned_to_id)
                .execution_options(synchronize_session="fetch")
            )
            assigned.extend(claimable)
        return assigned

    async def assign_agent(self, lead_ids: list[str], agent_id: str) -> int:
        updated = 0
        for chunk in _chunks(list(dict.fromkeys(lead_ids)), self._chunk_size):
            result = self._session.execute(
                update(LeadModel)
                .where(LeadModel.id.in_(chunk))
                .values(assigned_to_id=agent_id)
                .execution_options(synchronize_session="fetch")
            )
            updated += result.rowcount
        return updated

    async def assign_unassigned_pool_leads(
        self,
        pool_id: str,
        lead_ids: list[str],
        agent_id: str,
    ) -> int:
        updated = 0
        for chunk in _chunks(list(dict.fromkeys(lead_ids)), self._chunk_size):
            result = self._session.execute(
                update(LeadModel)
                .where(
                    LeadModel.id.in_(chunk),
                    LeadModel.lead_pool_id == pool_id,
                    LeadModel.assigned_to_id.is_(None),
                )
                .values(assigned_to_id=agent_id)
                .execution_options(synchronize_session="fetch")
            )
            updated += result.rowcount
        return updated

    async def list_pool_leads(
        self,
        pool_id: str,
        unassigned_only: bool,
        offset: int,
        limit: int,
    ) -> tuple[list[Lead], int]:
        criteria = [LeadModel.lead_pool_id == pool_id]
        if unassigned_only:
            criteria.append(LeadModel.assigned_to_id.is_(None))

        total = self._session.scalar(select(func.count(LeadModel.id)).where(*criteria)) or 0
        models = self._session.scalars(
            select(LeadModel)
            .where(*criteria)
            .order_by(LeadModel.created_at.desc(), LeadModel.id)
            .offset(offset)
            .limit(limit)
        ).all()
        return [self._model_to_entity(model) for model in models], total

    def _count(self, *criteria) -> int:
        return self._session.scalar(select(func.count(LeadModel.id)).where(*criteria)) or 0

    async def pool_stats(self, pool_id: str) -> PoolStats:
        in_pool = LeadModel.lead_pool_id == pool_id
        total = self._count(in_pool)
        assigned = self._count(in_pool, LeadModel.assigned_to_id.is_not(None))
        called = self._count(in_pool, LeadModel.last_called_at.is_not(None))
        connected = (
            self._session.scalar(
                select(func.count(LeadModel.id))
                .join(
                    FirstLevelDispositionModel,
                    FirstLevelDispositionModel.id == LeadModel.first_level_disposition_id,
                )
                .where(in_pool, FirstLevelDispositionModel.name == CONTACTED)
            )
            or 0
        )
        sales = (
            self._session.scalar(
                select(func.count(LeadModel.id))
                .join(
                    SecondLevelDispositionModel,
                    SecondLevelDispositionModel.id == LeadModel.second_level_disposition_id,
                )
                .where(in_pool, SecondLevelDispositionModel.name == SALE)
            )
            or 0
        )
        return PoolStats(
            total=total,
            assigned=assigned,
            unassigned=total - assigned,
            called=called,
            connected=connected,
            sales=sales,
        )

    async def count_by_campaign(self, campaign_id: str) -> int:
        return self._count(LeadModel.campaign_id == campaign_id)
