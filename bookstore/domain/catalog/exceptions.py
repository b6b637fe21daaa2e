"""Catalog domain exceptions."""

from uuid import UUID

from bookstore.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    DuplicateResourceError,
    EntityNotFoundError,
)


class BookNotFoundError(EntityNotFoundError):
    """Raised when a book cannot be found."""

    def __init__(self, book_id: UUID) -> None:
        super().__init__("Book", book_id)


class AuthorNotFoundError(EntityNotFoundError):
    """Raised when an author referenced by id does not exist."""

    def __init__(self, author_id: UUID) -> None:
        super().__init__("Author", author_id)


class GenreNotFoundError(EntityNotFoundError):
    """Raised when a genre referenced by id does not exist."""

    def __init__(self, genre_id: UUID) -> None:
        super().__init__("Genre", genre_id)


class DuplicateIsbnError(DuplicateResourceError):
    """Raised when another book already uses the ISBN."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"Book with ISBN {isbn} already exists", {"isbn": isbn})
        self.isbn = isbn


class IdMismatchError(DomainError):
    """Raised when the id in the request path differs from the id in the body."""

    def __init__(self, path_id: UUID, body_id: UUID | None) -> None:
        super().__init__(
            f"Path ID {path_id} does not match body ID {body_id}",
            {"path_id": path_id, "body_id": body_id},
        )
        self.path_id = path_id
        self.body_id = body_id


class InsufficientInventoryError(BusinessRuleViolationError):
    """Raised when a reservation asks for more copies than are available."""

    def __init__(self, book_id: UUID, requested_quantity: int, available_quantity: int) -> None:
        super().__init__(
            "insufficient_inventory",
            f"Insufficient inventory for book {book_id}. "
            f"Requested: {requested_quantity}, Available: {available_quantity}",
        )
        self.book_id = book_id
        self.requested_quantity = requested_quantity
        self.available_quantity = available_quantity


class InvalidInventoryAdjustmentError(BusinessRuleViolationError):
    """Raised when a stock adjustment would drive the stock below zero."""

    def __init__(self, book_id: UUID, current_quantity: int, adjustment: int) -> None:
        super().__init__(
            "non_negative_stock",
            f"Inventory adjustment would result in negative stock for book {book_id}",
        )
        self.book_id = book_id
        self.current_quantity = current_quantity
        self.adjustment = adjustment
