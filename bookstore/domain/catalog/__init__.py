"""Catalog domain layer: books, their authors and genres, and stock."""

from bookstore.domain.catalog.entities import Author, Book, Genre
from bookstore.domain.catalog.exceptions import (
    AuthorNotFoundError,
    BookNotFoundError,
    DuplicateIsbnError,
    GenreNotFoundError,
    IdMismatchError,
    InsufficientInventoryError,
    InvalidInventoryAdjustmentError,
)
from bookstore.domain.catalog.value_objects import AdjustmentType, InventoryAdjustment

__all__ = [
    "AdjustmentType",
    "Author",
    "AuthorNotFoundError",
    "Book",
    "BookNotFoundError",
    "DuplicateIsbnError",
    "Genre",
    "GenreNotFoundError",
    "IdMismatchError",
    "InsufficientInventoryError",
    "InvalidInventoryAdjustmentError",
    "InventoryAdjustment",
]
