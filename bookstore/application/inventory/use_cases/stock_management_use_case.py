"""Stock adjustments and reorder thresholds."""

from uuid import UUID

import structlog

from bookstore.application.catalog.protocols import BookRepositoryProtocol
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.catalog.exceptions import BookNotFoundError
from bookstore.domain.catalog.value_objects import InventoryAdjustment
from bookstore.domain.common.value_objects.ids import BookId

logger = structlog.get_logger(__name__)


class StockManagementUseCase:
    """Use case for changing stock levels and reorder levels."""

    def __init__(self, book_repository: BookRepositoryProtocol, uow: UnitOfWork) -> None:
        self.book_repository = book_repository
        self.uow = uow

    def adjust_inventory(self, book_id: UUID, adjustment: InventoryAdjustment) -> None:
        """
        Apply one stock movement to the book identified by book_id.

        The book id from the path wins over the one inside the adjustment.

        Raises:
            BookNotFoundError: If the book does not exist
            InvalidInventoryAdjustmentError: If stock would drop below zero
        """
        with self.uow:
            self._apply(book_id, adjustment)
            self.uow.commit()

    def bulk_inventory_update(self, adjustments: list[InventoryAdjustment]) -> None:
        """
        Apply several adjustments atomically.

        If any of them fails, none is persisted.
        """
        with self.uow:
            for adjustment in adjustments:
                self._apply(adjustment.book_id.value, adjustment)
            self.uow.commit()

        logger.info("bulk_inventory_update_completed", adjustments=len(adjustments))

    def update_reorder_level(self, book_id: UUID, level: int) -> None:
        """
        Change the level at or below which a book needs restocking.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        with self.uow:
            book = self.book_repository.find_by_id(BookId(book_id))
            if book is None:
                raise BookNotFoundError(book_id)
            book.change_reorder_level(level)
            self.book_repository.save(book)
            self.uow.commit()

        logger.info("reorder_level_updated", book_id=str(book_id), reorder_level=level)

    def _apply(self, book_id: UUID, adjustment: InventoryAdjustment) -> None:
        book = self.book_repository.find_by_id(BookId(book_id))
        if book is None:
            raise BookNotFoundError(book_id)
        book.adjust_stock(adjustment.quantity_change)
        self.book_repository.save(book)
        logger.info(
            "inventory_adjusted",
            book_id=str(book_id),
            quantity_change=adjustment.quantity_change,
            adjustment_type=str(adjustment.type),
            reason=adjustment.reason,
        )
