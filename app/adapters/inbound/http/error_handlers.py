"""Translate domain errors into HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.errors import (
    ConfigurationError,
    ConflictError,
    InactiveCampaignError,
    InvalidDispositionError,
    LeadEngineError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from app.infrastructure.logging.logger import logger

_STATUS_CODES: dict[type, int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidDispositionError: status.HTTP_400_BAD_REQUEST,
    InactiveCampaignError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: LeadEngineError) -> int:
    """Most specific status code registered for the error's class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_CODES:
            return _STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def lead_engine_error_handler(request: Request, exc: LeadEngineError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({status_code}): {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.error, "message": exc.message},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.error, "message": details or "Invalid request"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Install the error envelope handlers on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(LeadEngineError, lead_engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
