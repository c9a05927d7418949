"""Unit tests for the default disposition seed."""

from sqlalchemy import func, select

from app.adapters.outbound.persistence.models import (
    FirstLevelDispositionModel,
    SecondLevelDispositionModel,
    ThirdLevelDispositionModel,
)
from app.infrastructure.seed_dispositions import seed_dispositions


def test_seed_creates_default_catalog(session_factory):
    with session_factory() as session:
        created = seed_dispositions(session)
        session.commit()

        assert created == 14
        assert session.scalar(select(func.count(FirstLevelDispositionModel.id))) == 2
        assert session.scalar(select(func.count(SecondLevelDispositionModel.id))) == 2
        categories = session.scalars(select(ThirdLevelDispositionModel.category)).all()
        assert sorted(set(categories)) == ["no_sale", "not_contacted"]


def test_seed_is_rerunnable(session_factory, seed):
    """Test a second run adds only what is missing."""
    seed.first_level("Contacted")

    with session_factory() as session:
        assert seed_dispositions(session) == 13
        session.commit()

    with session_factory() as session:
        assert seed_dispositions(session) == 0
