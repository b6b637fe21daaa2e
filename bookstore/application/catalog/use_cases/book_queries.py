"""Read-only book queries: filtered search and popularity listing."""

from bookstore.application.catalog.protocols import BookRepositoryProtocol, BookSearchCriteria
from bookstore.application.common.pagination import PaginatedResult, Pagination
from bookstore.application.common.sorting import parse_sort
from bookstore.domain.catalog.entities import Book

DEFAULT_POPULAR_LIMIT = 10


class SearchBooksUseCase:
    """Use case for searching the catalog."""

    def __init__(self, book_repository: BookRepositoryProtocol) -> None:
        self.book_repository = book_repository

    def search_books(
        self,
        criteria: BookSearchCriteria,
        pagination: Pagination,
        sort: str | None = None,
    ) -> PaginatedResult[Book]:
        """
        Search books by optional title, author and genre fragments.

        Raises:
            InvalidSortParameterError: If the sort parameter is not acceptable
        """
        sort_order = parse_sort(sort)
        books, total = self.book_repository.search(criteria, pagination, sort_order)
        return PaginatedResult(items=books, total=total, pagination=pagination)


class GetPopularBooksUseCase:
    """Use case listing in-stock books, most viewed first."""

    def __init__(self, book_repository: BookRepositoryProtocol) -> None:
        self.book_repository = book_repository

    def get_popular_books(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[Book]:
        return self.book_repository.find_available_by_popularity(limit)
