"""Unit tests for domain error to HTTP status mapping."""

import pytest
from fastapi import status

from app.adapters.inbound.http.error_handlers import status_code_for
from app.domain.errors import (
    AlreadyAssignedError,
    ConfigurationError,
    DuplicateLeadError,
    InactiveCampaignError,
    InvalidDispositionError,
    LeadAlreadyAssignedError,
    LeadEngineError,
    NotFoundError,
    StorageError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error,expected",
    [
        (ValidationError("bad input"), status.HTTP_400_BAD_REQUEST),
        (InvalidDispositionError("First", "x"), status.HTTP_400_BAD_REQUEST),
        (InactiveCampaignError("c-1"), status.HTTP_400_BAD_REQUEST),
        (NotFoundError("Lead", "l-1"), status.HTTP_404_NOT_FOUND),
        (LeadAlreadyAssignedError("l-1", "Spring"), status.HTTP_409_CONFLICT),
        (AlreadyAssignedError(2), status.HTTP_409_CONFLICT),
        (DuplicateLeadError("5550101"), status.HTTP_409_CONFLICT),
        (ConfigurationError("no sector"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        (StorageError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
        (LeadEngineError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
    ],
)
def test_status_code_for(error, expected):
    assert status_code_for(error) == expected


def test_field_is_named_in_validation_message():
    error = ValidationError("At least one lead is required", field="lead_ids")
    assert error.message == "Validation failed for field 'lead_ids': At least one lead is required"
