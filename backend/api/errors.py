"""
API error handling.

Maps the shared exception taxonomy onto HTTP statuses and renders the
standard error envelope: {error, message, code, details?}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AtelierError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses resolve to their nearest listed base
STATUS_BY_ERROR: tuple[tuple[type[AtelierError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (ExternalServiceError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: AtelierError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: AtelierError) -> JSONResponse:
    """Render an AtelierError as a JSON response with its mapped status."""
    status_code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def atelier_error_handler(request: Request, exc: AtelierError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")
    return error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures use the same envelope as ValidationError."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AtelierError, atelier_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
