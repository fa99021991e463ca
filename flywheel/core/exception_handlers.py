"""Exception handlers: FlywheelException and framework errors to JSON responses.

Every error body has the shape {"error": code, "message": text} plus
"details" for domain and validation errors. Register once with
register_exception_handlers(app).
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from flywheel.core.config import get_settings
from flywheel.domain.exceptions import FlywheelException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unknown codes are treated as bad requests
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNKNOWN_STATE": 400,
    "INVALID_TRANSITION": 400,
    "INVALID_STATE": 400,
    "AUTHENTICATION_ERROR": 401,
    "FORBIDDEN": 403,
    "RESOURCE_NOT_FOUND": 404,
    "WORKFLOW_REFERENCED": 409,
    "STATE_EXISTED": 409,
    "TRANSITION_EXISTED": 409,
    "ARCHIVE_STATUS_INVALID": 409,
    "AFFECTED_ROW_MISMATCH": 409,
    # stored workflow is inconsistent; not the caller's fault
    "STATE_INVALID": 500,
}


def status_for(error_code: str) -> int:
    return ERROR_CODE_STATUS.get(error_code, 400)


def _flywheel_exception_handler(request: Request, exc: FlywheelException) -> JSONResponse:
    status = status_for(exc.error_code)
    if status >= 500:
        logger.error(
            "%s %s failed with %s: %s %s",
            request.method,
            request.url.path,
            exc.error_code,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and other framework-raised HTTP errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 with the exception text only in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the app."""
    app.add_exception_handler(FlywheelException, _flywheel_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
