"""Unit tests for ImportPoolLeads use case."""

import pytest
from sqlalchemy import select

from app.adapters.outbound.persistence.lead_repository import SqlAlchemyLeadRepository
from app.adapters.outbound.persistence.models import LeadModel
from app.application.use_cases.import_pool_leads import ImportPoolLeads, read_column
from app.domain.errors import ConfigurationError, NotFoundError

SCENARIO_ROWS = [
    {"Full Name": "Alice", "Phone Number": "+1 555 0101", "Sector": "Technology", "Product": ""},
    {"Full Name": "Bob", "Phone Number": "555-0102", "Sector": "", "Product": "Loans"},
    {"Full Name": "", "Phone Number": "555-0103", "Sector": "", "Product": ""},
]


@pytest.fixture
def reference(seed):
    return {
        "general": seed.sector("General"),
        "technology": seed.sector("Technology"),
        "insurance": seed.product("Insurance"),
    }


@pytest.fixture
def pool(seed):
    campaign_id = seed.campaign()
    return campaign_id, seed.pool(campaign_id)


@pytest.fixture
def use_case(uow_factory):
    return ImportPoolLeads(uow_factory)


@pytest.mark.asyncio
async def test_three_row_scenario(use_case, seed, reference, pool, session_factory):
    """Test the reference scenario, then the identical re-import."""
    campaign_id, pool_id = pool

    summary = await use_case.execute(pool_id, SCENARIO_ROWS)

    assert summary.imported == 2
    assert summary.duplicates == 0
    assert summary.errors == 1
    assert [(e.row, e.reason) for e in summary.error_details] == [(3, "Missing Full Name")]
    assert seed.lead_count(campaign_id) == 2

    with session_factory() as session:
        leads = {
            lead.full_name: lead
            for lead in session.scalars(
                select(LeadModel).where(LeadModel.lead_pool_id == pool_id)
            ).all()
        }
        assert leads["Alice"].phone_number == "+15550101"
        assert leads["Alice"].sector_id == reference["technology"]
        assert leads["Bob"].sector_id == reference["general"]
        assert leads["Bob"].products == []
        assert leads["Bob"].campaign_id == campaign_id

    again = await use_case.execute(pool_id, SCENARIO_ROWS)

    assert again.imported == 0
    assert again.duplicates == 2
    assert again.errors == 1
    assert seed.lead_count(campaign_id) == 2


@pytest.mark.asyncio
async def test_missing_phone(use_case, reference, pool):
    _, pool_id = pool

    summary = await use_case.execute(pool_id, [{"name": "Carol", "phone": "   "}])

    assert summary.imported == 0
    assert [(e.row, e.reason) for e in summary.error_details] == [(1, "Missing Phone Number")]


@pytest.mark.asyncio
async def test_intra_batch_duplicates(use_case, seed, reference, pool):
    """Test a number repeated inside one batch is imported once."""
    campaign_id, pool_id = pool
    rows = [
        {"full_name": "Dan", "phone_number": "5550201"},
        {"full_name": "Dan Again", "phone_number": "555 0201"},
        {"full_name": "Eve", "phone_number": "5550202"},
    ]

    summary = await use_case.execute(pool_id, rows)

    assert summary.imported == 2
    assert summary.duplicates == 1
    assert seed.leads_with_phone("5550201") == 1
    assert seed.lead_count(campaign_id) == 2


@pytest.mark.asyncio
async def test_existing_lead_elsewhere_is_duplicate(use_case, seed, reference, pool):
    _, pool_id = pool
    seed.lead("5550301")

    summary = await use_case.execute(pool_id, [{"name": "Frank", "phone": "5550301"}])

    assert summary.imported == 0
    assert summary.duplicates == 1


@pytest.mark.asyncio
async def test_case_insensitive_matching(use_case, reference, pool, session_factory):
    _, pool_id = pool

    await use_case.execute(
        pool_id,
        [
            {
                "name": "Gina",
                "phone": "5550401",
                "business_sector": "TECHNOLOGY",
                "product": "insurance",
            }
        ],
    )

    with session_factory() as session:
        lead = session.scalars(select(LeadModel).where(LeadModel.phone_number == "5550401")).one()
        assert lead.sector_id == reference["technology"]
        assert [product.id for product in lead.products] == [reference["insurance"]]


@pytest.mark.asyncio
async def test_configured_default_sector(uow_factory, seed, reference, pool, session_factory):
    _, pool_id = pool
    use_case = ImportPoolLeads(uow_factory, default_sector_name="Technology")

    await use_case.execute(pool_id, [{"name": "Hank", "phone": "5550501", "sector": "Unknown"}])

    with session_factory() as session:
        lead = session.scalars(select(LeadModel).where(LeadModel.phone_number == "5550501")).one()
        assert lead.sector_id == reference["technology"]


@pytest.mark.asyncio
async def test_no_sector_configured(use_case, pool):
    _, pool_id = pool

    with pytest.raises(ConfigurationError):
        await use_case.execute(pool_id, [{"name": "Ivy", "phone": "5550601"}])


@pytest.mark.asyncio
async def test_only_invalid_rows_need_no_sector(use_case, seed, pool):
    """Test a batch without creatable rows succeeds even with no sector configured."""
    campaign_id, pool_id = pool

    summary = await use_case.execute(pool_id, [{"name": "", "phone": "5550701"}])

    assert summary.errors == 1
    assert seed.lead_count(campaign_id) == 0


@pytest.mark.asyncio
async def test_unknown_pool(use_case, reference):
    with pytest.raises(NotFoundError, match="Lead pool"):
        await use_case.execute("missing", [{"name": "Jack", "phone": "5550801"}])


@pytest.mark.asyncio
async def test_number_stored_after_precheck_counts_as_duplicate(
    use_case, seed, reference, pool, monkeypatch
):
    """Test a number inserted after the pre-check is skipped and the rest still import."""
    campaign_id, pool_id = pool
    seed.lead("5550902")

    async def stale_precheck(self, phone_numbers):
        return set()

    monkeypatch.setattr(SqlAlchemyLeadRepository, "existing_phone_numbers", stale_precheck)

    summary = await use_case.execute(
        pool_id,
        [{"name": "Kim", "phone": "5550901"}, {"name": "Lee", "phone": "5550902"}],
    )

    assert summary.imported == 1
    assert summary.duplicates == 1
    assert summary.errors == 0
    assert seed.leads_with_phone("5550901") == 1
    assert seed.leads_with_phone("5550902") == 1
    assert seed.lead_count(campaign_id) == seed.leads_in_campaign(campaign_id) == 1


def test_read_column_uses_first_non_empty_synonym():
    row = {"Full Name": "  ", "full_name": None, "name": " Max "}
    assert read_column(row, ("Full Name", "full_name", "name")) == "Max"
    assert read_column({}, ("Full Name",)) == ""
