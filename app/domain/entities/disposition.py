"""Disposition catalog entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

CONTACTED = "Contacted"
NOT_CONTACTED = "Not Contacted"
SALE = "Sale"
NO_SALE = "No Sale"


class ReasonCategory(str, Enum):
    """Partition of third level dispositions."""

    NO_SALE = "no_sale"
    NOT_CONTACTED = "not_contacted"


@dataclass(frozen=True)
class FirstLevelDisposition:
    """Contact status (e.g. Contacted / Not Contacted)."""

    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class SecondLevelDisposition:
    """Sale status (e.g. Sale / No Sale)."""

    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class ThirdLevelDisposition:
    """Reason code, tagged with the branch it belongs to."""

    id: str
    name: str
    category: ReasonCategory
    description: Optional[str] = None
    is_active: bool = True
