"""Unit tests for DispositionCatalog use case."""

import pytest

from app.application.use_cases.disposition_catalog import DispositionCatalog


@pytest.mark.asyncio
async def test_lists_active_entries_by_default(uow_factory, seed):
    seed.default_catalog()
    seed.third_level("Deceased", "not_contacted", is_active=False)

    catalog = await DispositionCatalog(uow_factory).execute()

    assert [item.name for item in catalog.first_level] == ["Contacted", "Not Contacted"]
    assert [item.name for item in catalog.second_level] == ["No Sale", "Sale"]
    assert len(catalog.third_level) == 10
    assert {item.category for item in catalog.third_level} == {"no_sale", "not_contacted"}
    assert "Deceased" not in {item.name for item in catalog.third_level}


@pytest.mark.asyncio
async def test_includes_inactive_entries_on_request(uow_factory, seed):
    seed.default_catalog()
    seed.first_level("Do Not Call", is_active=False)

    catalog = await DispositionCatalog(uow_factory).execute(active_only=False)

    assert "Do Not Call" in {item.name for item in catalog.first_level}
