"""Common value objects shared across all domain modules."""

from .ids import AuthorId, BookId, GenreId

__all__ = [
    "AuthorId",
    "BookId",
    "GenreId",
]
