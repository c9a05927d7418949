"""Phone number value object."""

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")


def normalize_phone_number(raw: str) -> str:
    """
    Normalize a phone number for duplicate comparison.

    Only whitespace is removed. Punctuation and country codes are kept as entered,
    so "+1-555-0101" and "15550101" stay distinct.

    Args:
        raw: Phone number as entered

    Returns:
        Normalized phone number (may be empty)
    """
    return _WHITESPACE.sub("", raw or "")


@dataclass(frozen=True)
class PhoneNumber:
    """Normalized, non-empty phone number."""

    value: str

    def __post_init__(self) -> None:
        """Validate phone number."""
        if not self.value:
            raise ValueError("Phone number cannot be empty")
        if _WHITESPACE.search(self.value):
            raise ValueError("Phone number must be normalized")

    @classmethod
    def parse(cls, raw: str) -> "PhoneNumber":
        """
        Build a phone number from raw input.

        Raises:
            ValueError: If nothing is left after normalization
        """
        return cls(normalize_phone_number(raw))

    def __str__(self) -> str:
        return self.value
