"""Helpers for matching free-text sector and product names."""

from typing import Optional, Sequence, TypeVar

from app.domain.entities.reference_data import Product, Sector
from app.domain.errors import ConfigurationError

Named = TypeVar("Named", Sector, Product)


def build_name_index(items: Sequence[Named]) -> dict[str, Named]:
    """
    Index items by lower-cased name; the first item wins on collisions.

    Args:
        items: Sectors or products, in preference order

    Returns:
        Mapping of lower-cased name to item
    """
    index: dict[str, Named] = {}
    for item in items:
        index.setdefault(item.name.lower(), item)
    return index


def match_by_name(index: dict[str, Named], name: str) -> Optional[Named]:
    """Case-insensitive exact match; blank names never match."""
    name = (name or "").strip()
    if not name:
        return None
    return index.get(name.lower())


def pick_default_sector(sectors: Sequence[Sector], preferred_name: Optional[str]) -> Sector:
    """
    Choose the sector used when a lead names none (or an unknown one).

    Args:
        sectors: Sectors ordered oldest first
        preferred_name: Configured default sector name, if any

    Returns:
        The configured sector when it exists, otherwise the oldest sector

    Raises:
        ConfigurationError: If no sector exists at all
    """
    if not sectors:
        raise ConfigurationError("No business sector configured. Please add a sector first.")
    if preferred_name:
        preferred = match_by_name(build_name_index(sectors), preferred_name)
        if preferred is not None:
            return preferred
    return sectors[0]
