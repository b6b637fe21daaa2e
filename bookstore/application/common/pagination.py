"""
Pagination types for list queries.

Pages are zero-based: page 0 is the first page.

Example:
    books, total = repository.search(criteria, Pagination(page=0, size=20), sort)
    result = PaginatedResult(items=books, total=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from bookstore.domain.common.exceptions import ValidationError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (0-indexed)
        size: Number of items per page
    """

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValidationError("Page must not be negative", field="page", value=self.page)
        if self.size < 1:
            raise ValidationError("Page size must be at least 1", field="size", value=self.size)
        if self.size > MAX_PAGE_SIZE:
            raise ValidationError(
                f"Page size cannot exceed {MAX_PAGE_SIZE}", field="size", value=self.size
            )

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of items plus the total across all pages."""

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def size(self) -> int:
        return self.pagination.size

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total == 0:
            return 0
        return (self.total + self.pagination.size - 1) // self.pagination.size
