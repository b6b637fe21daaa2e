import pytest
from sqlalchemy.exc import OperationalError

from bookstore.application.inventory.use_cases import InventorySnapshot
from bookstore.infrastructure.observability.metrics import (
    PrometheusMetricsRecorder,
    quantity_range,
    refresh_inventory_gauges,
    registry,
)


@pytest.mark.parametrize(
    ("quantity", "expected"),
    [(1, "1-5"), (5, "1-5"), (6, "6-10"), (10, "6-10"), (11, "11-25"), (26, "26-50"), (51, "50+")],
)
def test_quantity_range(quantity: int, expected: str) -> None:
    assert quantity_range(quantity) == expected


def test_reservation_counter_is_labelled_by_range() -> None:
    labels = {"quantity_range": "6-10"}
    before = registry.get_sample_value("inventory_reserved_total", labels) or 0.0

    PrometheusMetricsRecorder().record_inventory_reserved(7)

    assert registry.get_sample_value("inventory_reserved_total", labels) == before + 1


class _SnapshotSource:
    def __init__(self, snapshot: InventorySnapshot | None) -> None:
        self._snapshot = snapshot

    def snapshot(self) -> InventorySnapshot:
        if self._snapshot is None:
            raise OperationalError("SELECT 1", {}, Exception("database is gone"))
        return self._snapshot


def test_gauges_follow_snapshot() -> None:
    refresh_inventory_gauges(_SnapshotSource(InventorySnapshot(total_books=7, restock_needed=2)))  # type: ignore[arg-type]

    assert registry.get_sample_value("inventory_total_books") == 7
    assert registry.get_sample_value("inventory_restock_needed") == 2


def test_gauges_reset_when_database_fails() -> None:
    refresh_inventory_gauges(_SnapshotSource(InventorySnapshot(total_books=7, restock_needed=2)))  # type: ignore[arg-type]
    refresh_inventory_gauges(_SnapshotSource(None))  # type: ignore[arg-type]

    assert registry.get_sample_value("inventory_total_books") == 0
    assert registry.get_sample_value("inventory_restock_needed") == 0
