"""Pydantic schemas for the inventory endpoints."""

from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from bookstore.domain.catalog.value_objects import AdjustmentType, InventoryAdjustment
from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_objects.ids import BookId


class InventoryAdjustmentRequest(BaseModel):
    """A signed stock movement."""

    book_id: UUID | None = Field(
        None, description="Target book; required in bulk requests, ignored when in the path"
    )
    quantity_change: int = Field(..., description="Positive adds stock, negative removes it")
    type: AdjustmentType = Field(..., description="Reason category for the movement")
    reason: str | None = Field(None, max_length=500)
    timestamp: datetime | None = None

    def to_domain(self, book_id: UUID | None = None) -> InventoryAdjustment:
        target = book_id or self.book_id
        if target is None:
            raise ValidationError("Book id is required", field="book_id")
        return InventoryAdjustment(
            book_id=BookId(target),
            quantity_change=self.quantity_change,
            type=self.type,
            reason=self.reason,
            timestamp=self.timestamp or datetime.now(UTC),
        )
