from .book_mapper import BookMapper
from .named_entity_mappers import AuthorMapper, GenreMapper

__all__ = ["AuthorMapper", "BookMapper", "GenreMapper"]
