"""SQLAlchemy-backed lead pool repository adapter."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.application.ports.lead_pool_repository import LeadPoolRepository
from app.domain.entities.lead_pool import LeadPool

from .models import LeadPoolModel, as_utc


class SqlAlchemyLeadPoolRepository(LeadPoolRepository):
    """SQLAlchemy implementation of lead pool repository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _model_to_entity(self, model: LeadPoolModel) -> LeadPool:
        return LeadPool(
            id=model.id,
            name=model.name,
            campaign_id=model.campaign_id,
            created_by_id=model.created_by_id,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def get(self, pool_id: str) -> Optional[LeadPool]:
        model = self._session.get(LeadPoolModel, pool_id)
        if model is None:
            return None
        return self._model_to_entity(model)

    async def add(self, pool: LeadPool) -> None:
        self._session.add(
            LeadPoolModel(
                id=pool.id,
                name=pool.name,
                campaign_id=pool.campaign_id,
                created_by_id=pool.created_by_id,
                created_at=pool.created_at,
                updated_at=pool.updated_at,
            )
        )
        self._session.flush()

    async def list(self) -> list[LeadPool]:
        models = self._session.scalars(
            select(LeadPoolModel).order_by(LeadPoolModel.created_at.desc())
        ).all()
        return [self._model_to_entity(model) for model in models]
