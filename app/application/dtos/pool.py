"""Lead pool DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO
from app.application.dtos.lead import LeadView


class PoolStats(DTO):
    """Progress counters for one pool."""

    total: int = 0
    assigned: int = 0
    unassigned: int = 0
    called: int = 0
    connected: int = 0
    sales: int = 0


class LeadPoolView(DTO):
    """Pool with its campaign and progress counters."""

    id: str
    name: str
    campaign_id: str
    campaign_name: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    stats: PoolStats = Field(default_factory=PoolStats)


class PoolLeadsPage(DTO):
    """One page of leads from a pool."""

    data: list[LeadView]
    total: int
    page: int
    limit: int
    total_pages: int


class DistributionResult(DTO):
    """Outcome of handing pooled leads to an agent."""

    pool_id: str
    agent_id: str
    agent_name: str
    count: int


class RowError(DTO):
    """Row-level import failure (row numbers are 1-based)."""

    row: int
    reason: str


class ImportSummary(DTO):
    """Outcome of a bulk import; partial success is the normal shape."""

    imported: int = 0
    duplicates: int = 0
    errors: int = 0
    error_details: list[RowError] = Field(default_factory=list)
