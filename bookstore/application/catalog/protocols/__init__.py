from .book_repository import BookRepositoryProtocol, BookSearchCriteria
from .metrics_recorder import MetricsRecorderProtocol
from .named_entity_repository import AuthorRepositoryProtocol, GenreRepositoryProtocol

__all__ = [
    "AuthorRepositoryProtocol",
    "BookRepositoryProtocol",
    "BookSearchCriteria",
    "GenreRepositoryProtocol",
    "MetricsRecorderProtocol",
]
