"""SQLAlchemy-backed disposition catalog repository adapter."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.application.ports.disposition_catalog_repository import DispositionCatalogRepository
from app.domain.entities.disposition import (
    FirstLevelDisposition,
    ReasonCategory,
    SecondLevelDisposition,
    ThirdLevelDisposition,
)

from .models import (
    FirstLevelDispositionModel,
    SecondLevelDispositionModel,
    ThirdLevelDispositionModel,
)


class SqlAlchemyDispositionCatalogRepository(DispositionCatalogRepository):
    """SQLAlchemy implementation of the disposition catalogs."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _first(model: FirstLevelDispositionModel) -> FirstLevelDisposition:
        return FirstLevelDisposition(
            id=model.id,
            name=model.name,
            description=model.description,
            is_active=bool(model.is_active),
        )

    @staticmethod
    def _second(model: SecondLevelDispositionModel) -> SecondLevelDisposition:
        return SecondLevelDisposition(
            id=model.id,
            name=model.name,
            description=model.description,
            is_active=bool(model.is_active),
        )

    @staticmethod
    def _third(model: ThirdLevelDispositionModel) -> ThirdLevelDisposition:
        return ThirdLevelDisposition(
            id=model.id,
            name=model.name,
            category=ReasonCategory(model.category),
            description=model.description,
            is_active=bool(model.is_active),
        )

    async def get_first_level(self, disposition_id: str) -> Optional[FirstLevelDisposition]:
        model = self._session.get(FirstLevelDispositionModel, disposition_id)
        return self._first(model) if model is not None else None

    async def get_second_level(self, disposition_id: str) -> Optional[SecondLevelDisposition]:
        model = self._session.get(SecondLevelDispositionModel, disposition_id)
        return self._second(model) if model is not None else None

    async def get_third_level(self, disposition_id: str) -> Optional[ThirdLevelDisposition]:
        model = self._session.get(ThirdLevelDispositionModel, disposition_id)
        return self._third(model) if model is not None else None

    async def list_first_level(self, active_only: bool = False) -> list[FirstLevelDisposition]:
        query = select(FirstLevelDispositionModel).order_by(FirstLevelDispositionModel.name)
        if active_only:
            query = query.where(FirstLevelDispositionModel.is_active.is_(True))
        return [self._first(model) for model in self._session.scalars(query).all()]

    async def list_second_level(self, active_only: bool = False) -> list[SecondLevelDisposition]:
        query = select(SecondLevelDispositionModel).order_by(SecondLevelDispositionModel.name)
        if active_only:
            query = query.where(SecondLevelDispositionModel.is_active.is_(True))
        return [self._second(model) for model in self._session.scalars(query).all()]

    async def list_third_level(
        self,
        category: Optional[ReasonCategory] = None,
        active_only: bool = False,
    ) -> list[ThirdLevelDisposition]:
        query = select(ThirdLevelDispositionModel).order_by(
            ThirdLevelDispositionModel.category, ThirdLevelDispositionModel.name
        )
        if category is not None:
            query = query.where(
                ThirdLevelDispositionModel.category == ReasonCategory(category).value
            )
        if active_only:
            query = query.where(ThirdLevelDispositionModel.is_active.is_(True))
        return [self._third(model) for model in self._session.scalars(query).all()]
