"""
RFC 7807 problem responses.

Every error leaves the API as ``application/problem+json`` with a stable
``type`` URI per error kind, so clients can branch on it instead of on
message text.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.application.common.sorting import InvalidSortParameterError
from bookstore.domain.catalog.exceptions import (
    IdMismatchError,
    InsufficientInventoryError,
    InvalidInventoryAdjustmentError,
)
from bookstore.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    DuplicateResourceError,
    EntityNotFoundError,
    ValidationError,
)
from bookstore.infrastructure.common.middleware import TRACE_ID_HEADER

logger = structlog.get_logger(__name__)

PROBLEM_BASE_URL = "https://bookstore-api.example.com/problems"
PROBLEM_CONTENT_TYPE = "application/problem+json"

# Problem kinds for plain HTTP errors raised by routing and security
_HTTP_PROBLEMS: dict[int, tuple[str, str]] = {
    status.HTTP_401_UNAUTHORIZED: ("unauthorized", "Unauthorized"),
    status.HTTP_403_FORBIDDEN: ("access-denied", "Access Denied"),
    status.HTTP_404_NOT_FOUND: ("resource-not-found", "Resource Not Found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("method-not-allowed", "Method Not Allowed"),
}


def problem_response(
    request: Request,
    status_code: int,
    slug: str,
    title: str,
    detail: str,
    headers: Mapping[str, str] | None = None,
    **properties: Any,
) -> JSONResponse:
    """Build a problem+json response; extra keyword arguments become extension members."""
    body: dict[str, Any] = {
        "type": f"{PROBLEM_BASE_URL}/{slug}",
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "timestamp": datetime.now(UTC),
        **properties,
    }
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=dict(headers) if headers else None,
        media_type=PROBLEM_CONTENT_TYPE,
    )


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_404_NOT_FOUND,
        "resource-not-found",
        "Resource Not Found",
        exc.message,
        resource_type=exc.entity_type,
        identifier=str(exc.entity_id),
    )


async def duplicate_resource_handler(
    request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return problem_response(
        request, status.HTTP_409_CONFLICT, "duplicate-resource", "Duplicate Resource", exc.message
    )


async def id_mismatch_handler(request: Request, exc: IdMismatchError) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "id-mismatch",
        "ID Mismatch",
        exc.message,
        path_id=str(exc.path_id),
        body_id=str(exc.body_id) if exc.body_id is not None else None,
    )


async def invalid_sort_handler(request: Request, exc: InvalidSortParameterError) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "invalid-sort",
        "Invalid Sort Parameter",
        exc.message,
    )


async def insufficient_inventory_handler(
    request: Request, exc: InsufficientInventoryError
) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_409_CONFLICT,
        "insufficient-inventory",
        "Insufficient Inventory",
        exc.message,
        book_id=str(exc.book_id),
        requested_quantity=exc.requested_quantity,
        available_quantity=exc.available_quantity,
    )


async def invalid_adjustment_handler(
    request: Request, exc: InvalidInventoryAdjustmentError
) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "invalid-inventory-adjustment",
        "Invalid Inventory Adjustment",
        exc.message,
        book_id=str(exc.book_id),
        current_quantity=exc.current_quantity,
        adjustment=exc.adjustment,
    )


async def business_rule_handler(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_409_CONFLICT,
        "business-rule-violation",
        "Business Rule Violation",
        exc.message,
        rule=exc.rule,
    )


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation-error",
        "Validation Error",
        "Request validation failed",
        errors=[{"field": exc.field, "message": exc.message}],
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return problem_response(
        request, status.HTTP_400_BAD_REQUEST, "bad-request", "Bad Request", exc.message
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"field": _error_field(error["loc"]), "message": error["msg"]} for error in exc.errors()
    ]
    return problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation-error",
        "Validation Error",
        "Request validation failed",
        errors=errors,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("data_integrity_violation", error=str(exc.orig))
    return problem_response(
        request,
        status.HTTP_409_CONFLICT,
        "data-integrity-violation",
        "Data Integrity Violation",
        "The request conflicts with existing data",
    )


async def stale_data_handler(request: Request, exc: StaleDataError) -> JSONResponse:
    logger.warning("concurrent_modification", error=str(exc))
    return problem_response(
        request,
        status.HTTP_409_CONFLICT,
        "concurrent-modification",
        "Concurrent Modification",
        "The resource was modified by another request; reload it and retry",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    slug, title = _HTTP_PROBLEMS.get(
        exc.status_code, ("error", HTTPStatus(exc.status_code).phrase)
    )
    return problem_response(
        request, exc.status_code, slug, title, str(exc.detail), headers=exc.headers
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs in the outermost middleware, after the trace id left the log context
    trace_id = getattr(request.state, "trace_id", None)
    logger.exception("unhandled_exception", path=request.url.path, trace_id=trace_id)
    return problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal-error",
        "Internal Server Error",
        "An unexpected error occurred",
        headers={TRACE_ID_HEADER: trace_id} if trace_id else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the problem+json handlers; the most specific class wins."""
    app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IdMismatchError, id_mismatch_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidSortParameterError, invalid_sort_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InsufficientInventoryError, insufficient_inventory_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidInventoryAdjustmentError, invalid_adjustment_handler)  # type: ignore[arg-type]
    app.add_exception_handler(BusinessRuleViolationError, business_rule_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, domain_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StaleDataError, stale_data_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _error_field(loc: tuple[int | str, ...] | list[int | str]) -> str:
    # Drop the leading "body"/"query"/"path" segment
    parts = [str(p) for p in loc]
    if parts and parts[0] in {"body", "query", "path", "header"}:
        parts = parts[1:]
    return ".".join(parts) or "request"
