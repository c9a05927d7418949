"""SQLAlchemy-backed sector and product repository adapter."""

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.application.ports.reference_data_repository import ReferenceDataRepository
from app.domain.entities.reference_data import Product, Sector

from .models import ProductModel, SectorModel, as_utc


class SqlAlchemyReferenceDataRepository(ReferenceDataRepository):
    """SQLAlchemy implementation of sector and product lookups."""

    def __init__(self, session: Session) -> None:
        self._session = session

    async def list_sectors(self) -> list[Sector]:
        models = self._session.scalars(
            select(SectorModel).order_by(SectorModel.created_at, SectorModel.id)
        ).all()
        return [Sector(id=m.id, name=m.name, created_at=as_utc(m.created_at)) for m in models]

    async def list_products(self) -> list[Product]:
        models = self._session.scalars(
            select(ProductModel).order_by(ProductModel.created_at, ProductModel.id)
        ).all()
        return [Product(id=m.id, name=m.name, created_at=as_utc(m.created_at)) for m in models]

    async def get_sector(self, sector_id: str) -> Optional[Sector]:
        model = self._session.get(SectorModel, sector_id)
        if model is None:
            return None
        return Sector(id=model.id, name=model.name, created_at=as_utc(model.created_at))

    async def get_products(self, product_ids: Iterable[str]) -> list[Product]:
        ids = list(dict.fromkeys(product_ids))
        if not ids:
            return []
        models = self._session.scalars(select(ProductModel).where(ProductModel.id.in_(ids))).all()
        return [Product(id=m.id, name=m.name, created_at=as_utc(m.created_at)) for m in models]
