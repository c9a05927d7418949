"""Lead entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from app.domain.value_objects.disposition_state import DispositionState


@dataclass
class Lead:
    """Contact record; phone_number is unique across the whole system."""

    id: str
    full_name: str
    phone_number: str
    sector_id: Optional[str] = None
    product_ids: list[str] = field(default_factory=list)
    campaign_id: Optional[str] = None
    assigned_to_id: Optional[str] = None
    lead_pool_id: Optional[str] = None
    first_level_disposition_id: Optional[str] = None
    second_level_disposition_id: Optional[str] = None
    third_level_disposition_id: Optional[str] = None
    disposition_notes: Optional[str] = None
    last_called_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    def record_disposition(
        self,
        state: DispositionState,
        notes: Optional[str],
        called_at: datetime,
    ) -> None:
        """
        Overwrite the call outcome with a validated disposition state.

        Args:
            state: Validated disposition state
            notes: Free-text notes (empty becomes None)
            called_at: Timestamp of the call
        """
        ids = state.to_ids()
        self.first_level_disposition_id = ids.first_level_id
        self.second_level_disposition_id = ids.second_level_id
        self.third_level_disposition_id = ids.third_level_id
        self.disposition_notes = notes or None
        self.last_called_at = called_at
        self.touch()

    @property
    def is_direct(self) -> bool:
        """True when the lead has no campaign."""
        return self.campaign_id is None
