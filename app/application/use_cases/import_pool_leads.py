"""Bulk import of tabular rows into a lead pool."""

from typing import Mapping, Optional, Sequence
from uuid import uuid4

from app.application.dtos.pool import ImportSummary, RowError
from app.application.ports.unit_of_work import UnitOfWorkFactory
from app.application.use_cases.detect_duplicate_leads import DuplicateDetector
from app.application.use_cases.reference_matching import (
    build_name_index,
    match_by_name,
    pick_default_sector,
)
from app.domain.entities.lead import Lead
from app.domain.errors import NotFoundError
from app.domain.value_objects.phone_number import normalize_phone_number
from app.infrastructure.logging.logger import log_import_summary

# Accepted column headers, in lookup order
NAME_COLUMNS = ("Full Name", "full_name", "name")
PHONE_COLUMNS = ("Phone Number", "phone_number", "phone")
SECTOR_COLUMNS = ("Sector", "sector", "business_sector")
PRODUCT_COLUMNS = ("Product", "product")

MISSING_NAME = "Missing Full Name"
MISSING_PHONE = "Missing Phone Number"

Row = Mapping[str, Optional[str]]


def read_column(row: Row, columns: Sequence[str]) -> str:
    """Return the first non-empty value among the synonym columns, stripped."""
    for column in columns:
        value = row.get(column)
        if value and value.strip():
            return value.strip()
    return ""


class ImportPoolLeads:
    """
    Import rows into a pool.

    Rows are classified first (error, duplicate, staged); staged leads are then
    inserted and the campaign counter is incremented by the number created, all in
    one transaction. A bad row never aborts the batch, and a staged number another
    request stored in the meantime is counted as a duplicate.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        default_sector_name: Optional[str] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._default_sector_name = default_sector_name

    async def execute(
        self,
        pool_id: str,
        rows: Sequence[Row],
        request_id: Optional[str] = None,
    ) -> ImportSummary:
        """
        Import rows.

        Args:
            pool_id: Target pool; leads join the pool's campaign
            rows: Column name to value mappings

        Returns:
            Counts of imported, duplicate and rejected rows plus the row errors

        Raises:
            NotFoundError: If the pool does not exist
            ConfigurationError: If a lead needs the default sector and none exists
        """
        error_details: list[RowError] = []
        duplicates = 0
        staged: list[Lead] = []

        async with self._uow_factory() as uow:
            pool = await uow.pools.get(pool_id)
            if pool is None:
                raise NotFoundError("Lead pool", pool_id)
            campaign = await uow.campaigns.get(pool.campaign_id)
            if campaign is None:
                raise NotFoundError("Campaign", pool.campaign_id)

            sectors = await uow.reference_data.list_sectors()
            sector_index = build_name_index(sectors)
            product_index = build_name_index(await uow.reference_data.list_products())

            parsed: list[tuple[int, str, str, Row]] = []
            for row_number, row in enumerate(rows, start=1):
                full_name = read_column(row, NAME_COLUMNS)
                phone_number = normalize_phone_number(read_column(row, PHONE_COLUMNS))
                if not full_name:
                    error_details.append(RowError(row=row_number, reason=MISSING_NAME))
                    continue
                if not phone_number:
                    error_details.append(RowError(row=row_number, reason=MISSING_PHONE))
                    continue
                parsed.append((row_number, full_name, phone_number, row))

            known = await DuplicateDetector(uow.leads).bulk_exists(
                phone for _, _, phone, _ in parsed
            )

            default_sector = None
            for _, full_name, phone_number, row in parsed:
                if phone_number in known:
                    duplicates += 1
                    continue
                # Later rows with the same number count as duplicates
                known.add(phone_number)

                sector = match_by_name(sector_index, read_column(row, SECTOR_COLUMNS))
                if sector is None:
                    if default_sector is None:
                        default_sector = pick_default_sector(sectors, self._default_sector_name)
                    sector = default_sector
                product = match_by_name(product_index, read_column(row, PRODUCT_COLUMNS))

                staged.append(
                    Lead(
                        id=str(uuid4()),
                        full_name=full_name,
                        phone_number=phone_number,
                        sector_id=sector.id,
                        product_ids=[product.id] if product else [],
                        campaign_id=campaign.id,
                        lead_pool_id=pool.id,
                    )
                )

            created = await uow.leads.add_many(staged)
            duplicates += len(staged) - len(created)
            await uow.campaigns.increment_lead_count(campaign.id, len(created))
            await uow.commit()

        summary = ImportSummary(
            imported=len(created),
            duplicates=duplicates,
            errors=len(error_details),
            error_details=error_details,
        )
        log_import_summary(
            request_id,
            pool_id,
            imported=summary.imported,
            duplicates=summary.duplicates,
            errors=summary.errors,
        )
        return summary
