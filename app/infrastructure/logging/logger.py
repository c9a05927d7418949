"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with key=value structured format
_logger = logging.getLogger("lead_engine")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_operation(
    operation: str,
    request_id: Optional[str],
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for an engine operation.

    Args:
        operation: Operation name (e.g., 'assign_campaign', 'import_pool_leads')
        request_id: Request identifier (UUID string), None outside HTTP
        component: Component name (e.g., 'http', 'use_case', 'persistence')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "operation": operation,
        "request_id": request_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_disposition_update(
    request_id: Optional[str],
    lead_id: str,
    state: str,
    **kwargs: Any,
) -> None:
    """
    Log a disposition write.

    Args:
        request_id: Request identifier
        lead_id: Lead identifier
        state: Name of the disposition state variant
        **kwargs: Additional fields
    """
    log_operation(
        operation="update_disposition",
        request_id=request_id,
        component="disposition",
        lead_id=lead_id,
        disposition_state=state,
        **kwargs,
    )


def log_assignment(
    request_id: Optional[str],
    target: str,
    target_id: str,
    assigned: int,
    **kwargs: Any,
) -> None:
    """
    Log a campaign, agent or pool assignment.

    Args:
        request_id: Request identifier
        target: 'campaign', 'agent' or 'pool_distribution'
        target_id: Campaign or agent identifier
        assigned: Number of leads updated
        **kwargs: Additional fields (skipped, not_found, ...)
    """
    log_operation(
        operation=f"assign_{target}",
        request_id=request_id,
        component="assignment",
        target_id=target_id,
        assigned=assigned,
        **kwargs,
    )


def log_import_summary(
    request_id: Optional[str],
    pool_id: str,
    imported: int,
    duplicates: int,
    errors: int,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of a bulk import.

    Args:
        request_id: Request identifier
        pool_id: Pool identifier
        imported: Rows created
        duplicates: Rows skipped as duplicates
        errors: Rows rejected
        **kwargs: Additional fields
    """
    log_operation(
        operation="import_pool_leads",
        request_id=request_id,
        component="pool",
        pool_id=pool_id,
        imported=imported,
        duplicates=duplicates,
        errors=errors,
        **kwargs,
    )


# Export logger instance for modules that log free-form messages
logger = _logger
