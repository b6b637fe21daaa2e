"""Operational endpoints: health, build info and Prometheus scrape."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bookstore.application.inventory.use_cases import InventoryQueryUseCase
from bookstore.config import Settings, get_settings
from bookstore.core import container
from bookstore.database import DatabaseSession
from bookstore.infrastructure.common.di import inject_use_case
from bookstore.infrastructure.observability.metrics import refresh_inventory_gauges, render_latest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/actuator", tags=["actuator"])


@router.get("/health")
def health(db: DatabaseSession) -> JSONResponse:
    """Report UP when the database answers, DOWN (503) otherwise."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("health_check_failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "DOWN", "components": {"db": {"status": "DOWN"}}},
        )
    return JSONResponse(content={"status": "UP", "components": {"db": {"status": "UP"}}})


@router.get("/info")
def info(settings: Annotated[Settings, Depends(get_settings)]) -> dict[str, Any]:
    return {
        "app": {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }
    }


@router.get("/prometheus")
def prometheus(
    inventory_query: Annotated[
        InventoryQueryUseCase, Depends(inject_use_case(container.inventory_query_use_case))
    ],
) -> Response:
    """Prometheus text exposition; inventory gauges are recomputed on every scrape."""
    refresh_inventory_gauges(inventory_query)
    return Response(content=render_latest(), media_type=CONTENT_TYPE_LATEST)
