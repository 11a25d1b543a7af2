"""
Maps service errors to HTTP responses.

Error bodies are always {"error": message}. Unexpected exceptions are logged
and reported to Sentry; callers only ever see a generic message.
"""

import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from core.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    Unauthorized,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Conflicts are reported as 400, like other caller mistakes
STATUS_CODES: dict[type[ServiceError], int] = {
    ValidationError: 400,
    ConflictError: 400,
    Unauthorized: 401,
    NotFoundError: 404,
    InternalError: 500,
}

GENERIC_ERROR = "Internal server error"


def status_code_for(error: ServiceError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 500


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        sentry_sdk.capture_exception(exc)
        return JSONResponse(status_code=status_code, content={"error": GENERIC_ERROR})
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Location and message of each validation failure (input values omitted)."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error mapping on an app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
