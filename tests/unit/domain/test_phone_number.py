"""Unit tests for PhoneNumber value object."""

import pytest

from app.domain.value_objects.phone_number import PhoneNumber, normalize_phone_number


def test_normalize_strips_all_whitespace():
    assert normalize_phone_number(" +1 555\t0101 \n") == "+15550101"


def test_normalize_keeps_punctuation():
    """Test only whitespace is removed, so formatting variants stay distinct."""
    assert normalize_phone_number("555-0102") == "555-0102"
    assert normalize_phone_number("(555) 0102") == "(555)0102"


def test_normalize_handles_none_and_blank():
    assert normalize_phone_number(None) == ""
    assert normalize_phone_number("   ") == ""


def test_parse_normalizes():
    phone = PhoneNumber.parse("+52 55 1234 5678")
    assert phone.value == "+525512345678"
    assert str(phone) == "+525512345678"


def test_parse_empty_raises():
    with pytest.raises(ValueError, match="cannot be empty"):
        PhoneNumber.parse("  ")


def test_unnormalized_value_raises():
    with pytest.raises(ValueError, match="must be normalized"):
        PhoneNumber("555 0101")


def test_phone_number_is_immutable():
    phone = PhoneNumber("5550101")
    with pytest.raises(AttributeError):
        phone.value = "5550102"
