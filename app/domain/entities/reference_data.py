"""Reference data used to enrich imported leads."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Sector:
    id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    created_at: datetime
