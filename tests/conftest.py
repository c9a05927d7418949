"""Shared fixtures: SQLite in-memory database standing in for Postgres."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.adapters.outbound.persistence.models import (
    Base,
    CampaignModel,
    FirstLevelDispositionModel,
    LeadModel,
    LeadPoolModel,
    ProductModel,
    SecondLevelDispositionModel,
    SectorModel,
    ThirdLevelDispositionModel,
    UserModel,
)
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork
from app.infrastructure.db import enable_sqlite_savepoints
from app.infrastructure.seed_dispositions import seed_dispositions


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


@pytest.fixture
def uow_factory(session_factory):
    """Unit of work factory bound to the test database."""

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return factory


class SeedData:
    """Insert rows directly, bypassing the use cases under test."""

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        # Strictly increasing timestamps keep "oldest first" ordering deterministic
        self._clock += timedelta(seconds=1)
        return self._clock

    def _add(self, model):
        with self._session_factory() as session:
            session.add(model)
            session.commit()
            return model.id

    def user(self, name: str = "Agent Smith", role: str = "AGENT", status: str = "ACTIVE") -> str:
        return self._add(
            UserModel(id=str(uuid4()), name=name, role=role, status=status, created_at=self._tick())
        )

    def sector(self, name: str) -> str:
        return self._add(SectorModel(id=str(uuid4()), name=name, created_at=self._tick()))

    def product(self, name: str) -> str:
        return self._add(ProductModel(id=str(uuid4()), name=name, created_at=self._tick()))

    def campaign(
        self,
        name: str = "Spring Campaign",
        is_active: bool = True,
        assigned_to_id: Optional[str] = None,
        lead_count: int = 0,
    ) -> str:
        return self._add(
            CampaignModel(
                id=str(uuid4()),
                campaign_name=name,
                is_active=is_active,
                assigned_to_id=assigned_to_id,
                lead_count=lead_count,
                created_at=self._tick(),
                updated_at=self._clock,
            )
        )

    def pool(self, campaign_id: str, name: str = "Pool A") -> str:
        return self._add(
            LeadPoolModel(
                id=str(uuid4()),
                name=name,
                campaign_id=campaign_id,
                created_at=self._tick(),
                updated_at=self._clock,
            )
        )

    def lead(
        self,
        phone_number: str,
        full_name: str = "Jane Doe",
        campaign_id: Optional[str] = None,
        assigned_to_id: Optional[str] = None,
        lead_pool_id: Optional[str] = None,
    ) -> str:
        return self._add(
            LeadModel(
                id=str(uuid4()),
                full_name=full_name,
                phone_number=phone_number,
                campaign_id=campaign_id,
                assigned_to_id=assigned_to_id,
                lead_pool_id=lead_pool_id,
                created_at=self._tick(),
                updated_at=self._clock,
            )
        )

    def first_level(self, name: str, is_active: bool = True) -> str:
        return self._add(
            FirstLevelDispositionModel(id=str(uuid4()), name=name, is_active=is_active)
        )

    def second_level(self, name: str, is_active: bool = True) -> str:
        return self._add(
            SecondLevelDispositionModel(id=str(uuid4()), name=name, is_active=is_active)
        )

    def third_level(self, name: str, category: str, is_active: bool = True) -> str:
        return self._add(
            ThirdLevelDispositionModel(
                id=str(uuid4()), name=name, category=category, is_active=is_active
            )
        )

    def default_catalog(self) -> dict[str, str]:
        """
        Seed the default disposition catalog.

        Returns:
            Mapping of disposition name to id (reasons keyed as "category:name")
        """
        with self._session_factory() as session:
            seed_dispositions(session)
            session.commit()
            ids = {m.name: m.id for m in session.scalars(select(FirstLevelDispositionModel))}
            ids.update(
                {m.name: m.id for m in session.scalars(select(SecondLevelDispositionModel))}
            )
            ids.update(
                {
                    f"{m.category}:{m.name}": m.id
                    for m in session.scalars(select(ThirdLevelDispositionModel))
                }
            )
            return ids

    def get_lead(self, lead_id: str) -> Optional[LeadModel]:
        with self._session_factory() as session:
            model = session.get(LeadModel, lead_id)
            if model is not None:
                session.expunge(model)
            return model

    def lead_count(self, campaign_id: str) -> int:
        with self._session_factory() as session:
            return session.get(CampaignModel, campaign_id).lead_count

    def leads_in_campaign(self, campaign_id: str) -> int:
        with self._session_factory() as session:
            return len(
                session.scalars(
                    select(LeadModel.id).where(LeadModel.campaign_id == campaign_id)
                ).all()
            )

    def leads_with_phone(self, phone_number: str) -> int:
        with self._session_factory() as session:
            return len(
                session.scalars(
                    select(LeadModel.id).where(LeadModel.phone_number == phone_number)
                ).all()
            )


@pytest.fixture
def seed(session_factory) -> SeedData:
    return SeedData(session_factory)
