"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with one error format:

    {
        "success": false,
        "error": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from case_search.dto import ErrorResponse
from case_search.exceptions import (
    CaseSearchError,
    UpstreamError,
    UpstreamErrorKind,
    ValidationError,
)

logger = logging.getLogger(__name__)

UPSTREAM_KIND_TO_STATUS: dict[UpstreamErrorKind, int] = {
    UpstreamErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    UpstreamErrorKind.UNREACHABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    UpstreamErrorKind.BAD_RESPONSE: status.HTTP_502_BAD_GATEWAY,
    UpstreamErrorKind.MALFORMED_PAYLOAD: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: CaseSearchError) -> int:
    """Map a domain exception to its HTTP status code."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, UpstreamError):
        return UPSTREAM_KIND_TO_STATUS.get(exc.kind, status.HTTP_502_BAD_GATEWAY)
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    body = ErrorResponse(error=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def case_search_error_handler(request: Request, exc: CaseSearchError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s on %s: %r", exc.__class__.__name__, request.url.path, exc)
    else:
        logger.info("Rejected %s: %s", request.url.path, exc.message)
    return _error_response(status_code, exc.message, exc.code)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in error.get("loc", ())[1:]) for error in exc.errors()]
    message = f"Invalid request parameters: {', '.join(fields)}" if fields else "Invalid request parameters"
    return await case_search_error_handler(request, ValidationError(message, details={"fields": fields}))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), f"HTTP_{exc.status_code}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s", request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again.",
        "INTERNAL_ERROR",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(CaseSearchError, case_search_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
