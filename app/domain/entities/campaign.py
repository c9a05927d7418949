"""Campaign entity."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Campaign:
    """Marketing funnel; lead_count mirrors the number of leads pointing at it."""

    id: str
    campaign_name: str
    is_active: bool = True
    lead_count: int = 0
    assigned_to_id: Optional[str] = None
    organization_name: Optional[str] = None
    created_by_id: Optional[str] = None
