from .create_book_use_case import CreateBookUseCase
from .delete_book_use_case import DeleteBookUseCase
from .get_book_use_case import GetBookUseCase
from .update_book_use_case import UpdateBookUseCase

__all__ = [
    "CreateBookUseCase",
    "DeleteBookUseCase",
    "GetBookUseCase",
    "UpdateBookUseCase",
]
