"""
Error Handlers

Centralized exception handlers for the FastAPI application.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from pymongo.errors import PyMongoError

from ...domain.errors import DomainError, StorageError, ValidationError
from ...utils.logger import get_logger, get_correlation_id

logger = get_logger(__name__)


def _error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content),
        headers={"X-Correlation-Id": get_correlation_id() or ""}
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Handle domain-specific errors (business logic errors).

    Not found, conflicts, bad credentials and the like.
    """
    logger.warning(f"Domain error: {exc.error_code} - {exc.message}")
    return _error_response(exc.http_status, exc.to_dict())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Unknown actions, missing complaint IDs and out-of-range coordinates
    are rejected here before reaching the services.
    """
    logger.warning(
        f"Validation error: {exc.errors()}, "
        f"path={request.url.path}, "
        f"method={request.method}"
    )
    error = ValidationError("Request validation failed", details={"errors": exc.errors()})
    return _error_response(error.http_status, error.to_dict())


async def storage_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """
    Handle document store failures that escaped a route.

    These represent lost operator intent, so they are reported rather
    than hidden.
    """
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=True)
    error = StorageError("The document store rejected the operation")
    return _error_response(error.http_status, error.to_dict())


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Logs full stack trace for debugging.
    """
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": {"hint": "Check server logs for details"}
            }
        }
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PyMongoError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
