"""Unit tests for sector and product name matching."""

from datetime import datetime, timezone

import pytest

from app.application.use_cases.reference_matching import (
    build_name_index,
    match_by_name,
    pick_default_sector,
)
from app.domain.entities.reference_data import Product, Sector
from app.domain.errors import ConfigurationError

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def sectors():
    return [
        Sector(id="s-general", name="General", created_at=CREATED),
        Sector(id="s-tech", name="Technology", created_at=CREATED),
    ]


def test_match_is_case_insensitive(sectors):
    index = build_name_index(sectors)
    assert match_by_name(index, "technology").id == "s-tech"
    assert match_by_name(index, "  GENERAL ").id == "s-general"


def test_blank_or_unknown_name_does_not_match(sectors):
    index = build_name_index(sectors)
    assert match_by_name(index, "") is None
    assert match_by_name(index, "Agriculture") is None


def test_first_item_wins_on_name_collision():
    products = [
        Product(id="p-1", name="Loans", created_at=CREATED),
        Product(id="p-2", name="LOANS", created_at=CREATED),
    ]
    assert match_by_name(build_name_index(products), "loans").id == "p-1"


def test_default_sector_prefers_configured_name(sectors):
    assert pick_default_sector(sectors, "technology").id == "s-tech"


def test_default_sector_falls_back_to_oldest(sectors):
    assert pick_default_sector(sectors, None).id == "s-general"
    assert pick_default_sector(sectors, "Unknown").id == "s-general"


def test_default_sector_requires_a_sector():
    with pytest.raises(ConfigurationError):
        pick_default_sector([], None)
