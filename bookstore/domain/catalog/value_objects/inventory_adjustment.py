from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_object import ValueObject
from bookstore.domain.common.value_objects.ids import BookId

MAX_REASON_LENGTH = 500


class AdjustmentType(StrEnum):
    """Why the stock level moved."""

    STOCK_RECEIVED = "STOCK_RECEIVED"
    STOCK_DAMAGED = "STOCK_DAMAGED"
    STOCK_LOST = "STOCK_LOST"
    STOCK_RETURNED = "STOCK_RETURNED"
    STOCK_SOLD = "STOCK_SOLD"
    MANUAL_ADJUSTMENT = "MANUAL_ADJUSTMENT"


@dataclass(frozen=True)
class InventoryAdjustment(ValueObject):
    """A signed stock movement for one book."""

    book_id: BookId
    quantity_change: int
    type: AdjustmentType
    reason: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.reason is not None and len(self.reason) > MAX_REASON_LENGTH:
            raise ValidationError(
                f"Reason must not exceed {MAX_REASON_LENGTH} characters", field="reason"
            )
