"""Domain errors for the lead disposition and assignment engine."""

from typing import Optional


class LeadEngineError(Exception):
    """Base exception for the engine."""

    error = "Internal Server Error"

    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(LeadEngineError):
    """Caller supplied structurally invalid input."""

    error = "Validation Error"

    def __init__(self, message: str = "Validation failed", field: Optional[str] = None) -> None:
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class InvalidDispositionError(LeadEngineError):
    """A referenced disposition does not exist or is inactive."""

    error = "Invalid Disposition"

    def __init__(self, level: str, disposition_id: str) -> None:
        self.level = level
        self.disposition_id = disposition_id
        super().__init__(f"{level} level disposition not found")


class NotFoundError(LeadEngineError):
    """Referenced lead, campaign, pool, user or catalog entry does not exist."""

    error = "Not Found"

    def __init__(self, resource: str = "Resource", resource_id: Optional[str] = None) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ConflictError(LeadEngineError):
    """State-based rejection."""

    error = "Conflict"


class LeadAlreadyAssignedError(ConflictError):
    """Lead already belongs to a campaign and cannot be reassigned."""

    error = "Already Assigned"

    def __init__(self, lead_id: str, campaign_name: Optional[str]) -> None:
        self.lead_id = lead_id
        self.campaign_name = campaign_name
        super().__init__(
            f'This lead is already assigned to the "{campaign_name}" campaign '
            "and cannot be reassigned."
        )


class AlreadyAssignedError(ConflictError):
    """Some pooled leads already have an agent."""

    error = "Some leads are already assigned"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"{count} lead(s) are already assigned to an agent. "
            "Please select only unassigned leads."
        )


class DuplicateLeadError(ConflictError):
    """A lead with the same phone number already exists."""

    error = "Duplicate"

    def __init__(self, phone_number: str, location: Optional[str] = None) -> None:
        self.phone_number = phone_number
        where = f" {location}" if location else ""
        super().__init__(
            f"This phone number already exists{where}. "
            "Please check existing leads before adding."
        )


class InactiveCampaignError(LeadEngineError):
    """Target campaign is not active."""

    error = "Invalid Campaign"

    def __init__(self, campaign_id: str) -> None:
        self.campaign_id = campaign_id
        super().__init__("Cannot assign leads to an inactive campaign")


class ConfigurationError(LeadEngineError):
    """Required reference data or settings are missing."""

    error = "Configuration Error"


class StorageError(LeadEngineError):
    """Unexpected persistence failure; details are logged, never surfaced."""

    error = "Internal Server Error"

    def __init__(self, message: str = "The operation could not be completed") -> None:
        super().__init__(message)
