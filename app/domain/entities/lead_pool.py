"""Lead pool entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class LeadPool:
    """Staged batch of leads scoped to one campaign."""

    id: str
    name: str
    campaign_id: str
    created_by_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
