from .book_repository import BookRepository
from .named_entity_repository import AuthorRepository, GenreRepository

__all__ = ["AuthorRepository", "BookRepository", "GenreRepository"]
