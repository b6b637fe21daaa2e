"""
Bookstore API entry point.

``create_app`` assembles middleware, exception handlers and routers;
the module-level ``app`` is what uvicorn serves, e.g.::

    uvicorn bookstore.main:app --reload
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from bookstore.config import Settings, configure_logging, get_settings
from bookstore.database import (
    create_schema,
    dispose_engine,
    initialize_database,
)
from bookstore.infrastructure.catalog.routers import books, inventory
from bookstore.infrastructure.common.middleware import TraceIdMiddleware
from bookstore.infrastructure.common.problem_details import register_exception_handlers
from bookstore.infrastructure.common.rate_limiting import limiter, rate_limit_exceeded_handler
from bookstore.infrastructure.identity.routers import auth
from bookstore.infrastructure.observability.routers import actuator

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings

    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)

    if settings.is_test_profile or settings.DATABASE_URL.startswith("sqlite:///:memory:"):
        create_schema()

    if not settings.SECRET_KEY:
        logger.warning(
            "secret_key_not_configured",
            detail="Using a random signing key; issued tokens will not survive a restart",
        )

    logger.info(
        "application_started",
        environment=settings.ENVIRONMENT,
        security_profile=settings.SECURITY_PROFILE,
    )
    yield

    dispose_engine()
    logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Catalog, inventory and ordering support for a bookstore",
        openapi_url="/v3/api-docs",
        docs_url="/swagger-ui",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Trace-Id", "X-Rate-Limit-Remaining"],
    )
    app.add_middleware(TraceIdMiddleware)

    app.state.limiter = limiter
    register_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(books.router, prefix=settings.API_PREFIX)
    app.include_router(inventory.router, prefix=settings.API_PREFIX)
    app.include_router(actuator.router)

    return app


app = create_app()


def run() -> None:
    """Console script entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "bookstore.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
    )
