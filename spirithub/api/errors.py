"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Toutes les erreurs sortent sous la forme `{code, message, trace_id[, details]}`:
- `ValidationError` du domaine et validation FastAPI -> 422
- `ConfigurationError` -> 500 (ne devrait survenir qu'au démarrage)
- `PersistenceUnavailable` -> 503 (le contenu du jour, lui, se replie sur le calcul en direct)
- `HTTPException` -> son propre statut
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from spirithub.core.http_constants import (
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_SERVICE_UNAVAILABLE,
    HTTP_UNPROCESSABLE_ENTITY,
)
from spirithub.domain.errors import (
    ConfigurationError,
    PersistenceUnavailable,
    ValidationError,
)

log = structlog.get_logger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: Any | None = None


class ErrorCodes:
    """Standard error codes for the API."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_STATUS_CODES = {
    400: "BAD_REQUEST",
    404: ErrorCodes.NOT_FOUND,
    405: "METHOD_NOT_ALLOWED",
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
    503: ErrorCodes.SERVICE_UNAVAILABLE,
}


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: Any | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Trace ID from X-Trace-ID, else the request id set by the middleware."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "trace_id", None)


def handle_domain_validation(request: Request, exc: ValidationError) -> JSONResponse:
    log.info("request_rejected", path=request.url.path, error=str(exc))
    return create_error_response(
        HTTP_UNPROCESSABLE_ENTITY,
        ErrorCodes.VALIDATION_ERROR,
        str(exc),
        extract_trace_id(request),
    )


def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return create_error_response(
        HTTP_UNPROCESSABLE_ENTITY,
        ErrorCodes.VALIDATION_ERROR,
        "invalid request parameters",
        extract_trace_id(request),
        details,
    )


def handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    log.error("configuration_error", path=request.url.path, error=str(exc))
    return create_error_response(
        HTTP_INTERNAL_SERVER_ERROR,
        ErrorCodes.CONFIGURATION_ERROR,
        "service misconfigured",
        extract_trace_id(request),
    )


def handle_persistence_unavailable(
    request: Request, exc: PersistenceUnavailable
) -> JSONResponse:
    log.warning("persistence_unavailable", path=request.url.path, error=str(exc))
    return create_error_response(
        HTTP_SERVICE_UNAVAILABLE,
        ErrorCodes.SERVICE_UNAVAILABLE,
        "storage temporarily unavailable",
        extract_trace_id(request),
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    return create_error_response(
        exc.status_code,
        _STATUS_CODES.get(exc.status_code, "HTTP_ERROR"),
        str(exc.detail),
        extract_trace_id(request),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_domain_validation)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(ConfigurationError, handle_configuration_error)
    app.add_exception_handler(PersistenceUnavailable, handle_persistence_unavailable)
    app.add_exception_handler(HTTPException, handle_http_exception)
