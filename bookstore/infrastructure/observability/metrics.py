"""Prometheus metrics for catalog and inventory activity."""

import structlog
from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from bookstore.application.inventory.use_cases import InventoryQueryUseCase

logger = structlog.get_logger(__name__)

registry = CollectorRegistry(auto_describe=True)

BOOKS_CREATED = Counter(
    "books_created", "Number of books created", ["genre"], registry=registry
)
BOOKS_VIEWED = Counter("books_viewed", "Number of book views", ["genre"], registry=registry)
INVENTORY_RESERVED = Counter(
    "inventory_reserved",
    "Number of inventory reservations",
    ["quantity_range"],
    registry=registry,
)
INVENTORY_TOTAL_BOOKS = Gauge(
    "inventory_total_books", "Total number of books in inventory", registry=registry
)
INVENTORY_RESTOCK_NEEDED = Gauge(
    "inventory_restock_needed", "Number of books needing restock", registry=registry
)


def quantity_range(quantity: int) -> str:
    """Bucket a reservation size into a low-cardinality label."""
    if quantity <= 5:  # noqa: PLR2004
        return "1-5"
    if quantity <= 10:  # noqa: PLR2004
        return "6-10"
    if quantity <= 25:  # noqa: PLR2004
        return "11-25"
    if quantity <= 50:  # noqa: PLR2004
        return "26-50"
    return "50+"


class PrometheusMetricsRecorder:
    """Records business events as Prometheus counters."""

    def record_book_created(self, genre: str) -> None:
        BOOKS_CREATED.labels(genre=genre).inc()
        logger.debug("metric_book_created", genre=genre)

    def record_book_viewed(self, genre: str | None) -> None:
        BOOKS_VIEWED.labels(genre=genre or "unknown").inc()
        logger.debug("metric_book_viewed", genre=genre)

    def record_inventory_reserved(self, quantity: int) -> None:
        label = quantity_range(quantity)
        INVENTORY_RESERVED.labels(quantity_range=label).inc()
        logger.debug("metric_inventory_reserved", quantity_range=label)


def refresh_inventory_gauges(inventory_query: InventoryQueryUseCase) -> None:
    """Recompute the inventory gauges; on database errors they read 0."""
    try:
        snapshot = inventory_query.snapshot()
    except SQLAlchemyError:
        logger.exception("inventory_gauge_refresh_failed")
        INVENTORY_TOTAL_BOOKS.set(0)
        INVENTORY_RESTOCK_NEEDED.set(0)
        return
    INVENTORY_TOTAL_BOOKS.set(snapshot.total_books)
    INVENTORY_RESTOCK_NEEDED.set(snapshot.restock_needed)


def render_latest() -> bytes:
    return generate_latest(registry)
