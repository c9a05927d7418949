"""Disposition catalog listing."""

from app.application.dtos.disposition import DispositionCatalogView, DispositionOption
from app.application.ports.unit_of_work import UnitOfWorkFactory


class DispositionCatalog:
    """Read the three disposition levels for building call outcome forms."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def execute(self, active_only: bool = True) -> DispositionCatalogView:
        async with self._uow_factory() as uow:
            first = await uow.dispositions.list_first_level(active_only=active_only)
            second = await uow.dispositions.list_second_level(active_only=active_only)
            third = await uow.dispositions.list_third_level(active_only=active_only)

        return DispositionCatalogView(
            first_level=[
                DispositionOption(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    is_active=item.is_active,
                )
                for item in first
            ],
            second_level=[
                DispositionOption(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    is_active=item.is_active,
                )
                for item in second
            ],
            third_level=[
                DispositionOption(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    is_active=item.is_active,
                    category=item.category.value,
                )
                for item in third
            ],
        )
