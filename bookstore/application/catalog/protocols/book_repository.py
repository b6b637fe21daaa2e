from dataclasses import dataclass
from typing import Protocol

from bookstore.application.common.pagination import Pagination
from bookstore.application.common.sorting import SortOrder
from bookstore.domain.catalog.entities.book import Book
from bookstore.domain.common.value_objects.ids import BookId


@dataclass(frozen=True)
class BookSearchCriteria:
    """Optional case-insensitive substring filters, combined with AND."""

    title: str | None = None
    author: str | None = None
    genre: str | None = None


class BookRepositoryProtocol(Protocol):
    def find_by_id(self, book_id: BookId) -> Book | None: ...

    def find_by_isbn(self, isbn: str) -> Book | None: ...

    def save(self, book: Book) -> Book: ...

    def delete_by_id(self, book_id: BookId) -> int: ...

    def search(
        self, criteria: BookSearchCriteria, pagination: Pagination, sort: SortOrder
    ) -> tuple[list[Book], int]: ...

    def find_needing_restock(self) -> list[Book]: ...

    def find_low_stock(self, threshold: int) -> list[Book]: ...

    def find_available_by_popularity(self, limit: int) -> list[Book]: ...

    def increment_view_count(self, book_id: BookId) -> None: ...

    def count(self) -> int: ...
