"""Disposition state value object.

A lead's call outcome is a path through a fixed tree::

    Not Contacted -> [reason]
    Contacted     -> Sale
                  -> No Sale -> [reason]

Each variant below is one node of that tree, so a combination the tree does not allow
has no representation. Build states through ``build_disposition_state``.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from app.domain.entities.disposition import (
    CONTACTED,
    NO_SALE,
    NOT_CONTACTED,
    FirstLevelDisposition,
    ReasonCategory,
    SecondLevelDisposition,
    ThirdLevelDisposition,
)
from app.domain.errors import ValidationError


class DispositionIds(NamedTuple):
    """Storage form of a disposition state."""

    first_level_id: str
    second_level_id: Optional[str]
    third_level_id: Optional[str]


@dataclass(frozen=True)
class NotContacted:
    """Lead could not be reached, optionally with a not_contacted reason."""

    contact_status_id: str
    reason_id: Optional[str] = None

    def to_ids(self) -> DispositionIds:
        return DispositionIds(self.contact_status_id, None, self.reason_id)


@dataclass(frozen=True)
class Contacted:
    """Contact status recorded without a sale status."""

    contact_status_id: str

    def to_ids(self) -> DispositionIds:
        return DispositionIds(self.contact_status_id, None, None)


@dataclass(frozen=True)
class ContactedSale:
    """Contacted with a sale status other than No Sale."""

    contact_status_id: str
    sale_status_id: str

    def to_ids(self) -> DispositionIds:
        return DispositionIds(self.contact_status_id, self.sale_status_id, None)


@dataclass(frozen=True)
class ContactedNoSale:
    """Contacted, no sale, optionally with a no_sale reason."""

    contact_status_id: str
    sale_status_id: str
    reason_id: Optional[str] = None

    def to_ids(self) -> DispositionIds:
        return DispositionIds(self.contact_status_id, self.sale_status_id, self.reason_id)


DispositionState = Union[NotContacted, Contacted, ContactedSale, ContactedNoSale]


def check_sale_status_allowed(first: FirstLevelDisposition) -> None:
    """Raise unless a sale status may follow this contact status."""
    if first.name != CONTACTED:
        raise ValidationError("Sale status can only be set when contact status is Contacted")


def check_reason_allowed(
    first: FirstLevelDisposition,
    second: Optional[SecondLevelDisposition],
) -> None:
    """Raise unless a reason may follow this contact status / sale status pair."""
    if second is None:
        if first.name != NOT_CONTACTED:
            raise ValidationError("Reason requires a sale status first")
        return
    if second.name != NO_SALE:
        raise ValidationError(f'A reason cannot be recorded for sale status "{second.name}"')


def expected_reason_category(second: Optional[SecondLevelDisposition]) -> ReasonCategory:
    """Category a reason must carry on the given branch."""
    if second is None:
        return ReasonCategory.NOT_CONTACTED
    return ReasonCategory.NO_SALE


def build_disposition_state(
    first: FirstLevelDisposition,
    second: Optional[SecondLevelDisposition] = None,
    third: Optional[ThirdLevelDisposition] = None,
) -> DispositionState:
    """
    Turn resolved catalog entries into a disposition state.

    Args:
        first: Contact status
        second: Optional sale status
        third: Optional reason

    Returns:
        The matching DispositionState variant

    Raises:
        ValidationError: If the combination is not a path of the disposition tree
    """
    if second is not None:
        check_sale_status_allowed(first)

    if third is not None:
        check_reason_allowed(first, second)
        expected = expected_reason_category(second)
        actual = ReasonCategory(third.category)
        if actual != expected:
            raise ValidationError(
                f'Reason "{third.name}" belongs to category "{actual.value}" '
                f'but this outcome requires "{expected.value}"'
            )

    reason_id = third.id if third is not None else None

    if first.name == NOT_CONTACTED:
        return NotContacted(contact_status_id=first.id, reason_id=reason_id)
    if second is None:
        return Contacted(contact_status_id=first.id)
    if second.name == NO_SALE:
        return ContactedNoSale(
            contact_status_id=first.id,
            sale_status_id=second.id,
            reason_id=reason_id,
        )
    return ContactedSale(contact_status_id=first.id, sale_status_id=second.id)
