"""Inventory reports."""

from dataclasses import dataclass

from bookstore.application.catalog.protocols import BookRepositoryProtocol
from bookstore.domain.catalog.entities import Book

DEFAULT_LOW_STOCK_THRESHOLD = 10


@dataclass(frozen=True)
class InventorySnapshot:
    total_books: int
    restock_needed: int


class InventoryQueryUseCase:
    """Use case for read-only inventory reports."""

    def __init__(self, book_repository: BookRepositoryProtocol) -> None:
        self.book_repository = book_repository

    def get_books_needing_restock(self) -> list[Book]:
        """Books whose available quantity is at or below their reorder level."""
        return self.book_repository.find_needing_restock()

    def get_low_stock_books(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[Book]:
        """Books whose available quantity is at or below threshold."""
        return self.book_repository.find_low_stock(threshold)

    def snapshot(self) -> InventorySnapshot:
        return InventorySnapshot(
            total_books=self.book_repository.count(),
            restock_needed=len(self.book_repository.find_needing_restock()),
        )
