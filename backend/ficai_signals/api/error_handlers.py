"""Error Handlers: map every failure to the FicAiError JSON envelope.

Invariants:
    - FicAiError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR with one detail per field
    - Anything else → 500 INTERNAL_ERROR, never leaks internal details
    - Every body shares one envelope shape, timestamp included

Design Decisions:
    - Validation and catch-all responses are built from the error hierarchy
      instead of hand-written dicts, so the envelope cannot drift
    - Client errors (< 500) logged at WARNING, server errors at ERROR
    - UpstreamError.reason and DatabaseError.detail go to the log, not the body
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ficai_signals.core.errors import (
    ErrorCategory, ErrorSeverity, FicAiError, ValidationError,
)

logger = logging.getLogger(__name__)

# FastAPI prefixes each error location with where the value came from
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FicAiError, _handle_ficai_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_ficai_error(request: Request, exc: FicAiError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    detail = getattr(exc, "reason", None) or getattr(exc, "detail", None)
    logger.log(
        level,
        f"{type(exc).__name__}: {exc.message}" + (f" ({detail})" if detail else ""),
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "account_id": exc.context.account_id,
            "url": exc.context.url,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request: {', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    error = ValidationError(
        "Invalid request data", field=details[0]["field"] if details else None,
    )
    body = error.to_response()
    body["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=body)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    error = FicAiError(
        "An unexpected error occurred", "INTERNAL_ERROR",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error.to_response(),
    )


def _field_detail(error: dict) -> dict:
    loc = list(error.get("loc", ()))
    if loc and loc[0] in _LOCATION_ROOTS:
        loc = loc[1:]
    return {
        "field": ".".join(str(part) for part in loc) or "body",
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }
