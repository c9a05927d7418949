"""Disposition catalog DTOs."""

from typing import Optional

from app.application.dtos.base import DTO


class DispositionOption(DTO):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    category: Optional[str] = None


class DispositionCatalogView(DTO):
    """All three catalog levels."""

    first_level: list[DispositionOption]
    second_level: list[DispositionOption]
    third_level: list[DispositionOption]
