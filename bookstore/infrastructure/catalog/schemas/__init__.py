from .book_schemas import (
    AuthorRef,
    AuthorResponse,
    BookRequest,
    BookResponse,
    GenreRef,
    GenreResponse,
)
from .inventory_schemas import InventoryAdjustmentRequest

__all__ = [
    "AuthorRef",
    "AuthorResponse",
    "BookRequest",
    "BookResponse",
    "GenreRef",
    "GenreResponse",
    "InventoryAdjustmentRequest",
]
