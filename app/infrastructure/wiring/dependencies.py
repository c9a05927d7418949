"""Dependency injection factory functions."""

from functools import lru_cache

from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from app.adapters.outbound.persistence.unit_of_work import SqlAlchemyUnitOfWork
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.use_cases.assign_leads_to_agent import AssignLeadsToAgent
from app.application.use_cases.assign_leads_to_campaign import AssignLeadsToCampaign
from app.application.use_cases.create_lead import CreateLead
from app.application.use_cases.detect_duplicate_leads import CheckDuplicateLead
from app.application.use_cases.disposition_catalog import DispositionCatalog
from app.application.use_cases.distribute_pool_leads import DistributePoolLeads
from app.application.use_cases.import_pool_leads import ImportPoolLeads
from app.application.use_cases.manage_lead_pools import ManageLeadPools
from app.application.use_cases.update_lead_disposition import UpdateLeadDisposition
from app.infrastructure.config.settings import settings


def create_unit_of_work_factory() -> UnitOfWorkFactory:
    """
    Factory function to create the unit of work factory.

    Returns:
        Callable opening a new SQLAlchemy unit of work per call
    """
    if not settings.database_url:
        raise ValueError("DATABASE_URL is required for lead storage")
    return SqlAlchemyUnitOfWork


@lru_cache
def create_idempotency_store() -> IdempotencyStore:
    """
    Factory function to create idempotency store.

    Returns:
        IdempotencyStore instance (Redis or NoOp)
    """
    if not settings.idempotency_enabled:
        return NoOpIdempotencyStore()

    if not settings.redis_url:
        # Idempotency requested without Redis: requests are processed normally
        return NoOpIdempotencyStore()

    return RedisIdempotencyStore(settings.redis_url)


def create_update_lead_disposition() -> UpdateLeadDisposition:
    return UpdateLeadDisposition(create_unit_of_work_factory())


def create_assign_leads_to_campaign() -> AssignLeadsToCampaign:
    return AssignLeadsToCampaign(create_unit_of_work_factory())


def create_assign_leads_to_agent() -> AssignLeadsToAgent:
    return AssignLeadsToAgent(create_unit_of_work_factory())


def create_distribute_pool_leads() -> DistributePoolLeads:
    return DistributePoolLeads(create_unit_of_work_factory())


def create_import_pool_leads() -> ImportPoolLeads:
    return ImportPoolLeads(
        create_unit_of_work_factory(),
        default_sector_name=settings.default_sector_name,
    )


def create_create_lead() -> CreateLead:
    return CreateLead(
        create_unit_of_work_factory(),
        default_sector_name=settings.default_sector_name,
    )


def create_check_duplicate_lead() -> CheckDuplicateLead:
    return CheckDuplicateLead(create_unit_of_work_factory())


def create_manage_lead_pools() -> ManageLeadPools:
    return ManageLeadPools(
        create_unit_of_work_factory(),
        page_size=settings.pool_leads_page_size,
    )


def create_disposition_catalog() -> DispositionCatalog:
    return DispositionCatalog(create_unit_of_work_factory())
