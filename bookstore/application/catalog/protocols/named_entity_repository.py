from typing import Protocol

from bookstore.domain.catalog.entities.author import Author
from bookstore.domain.catalog.entities.genre import Genre
from bookstore.domain.common.value_objects.ids import AuthorId, GenreId


class AuthorRepositoryProtocol(Protocol):
    def find_by_id(self, author_id: AuthorId) -> Author | None: ...

    def find_by_name_ignore_case(self, name: str) -> Author | None: ...

    def save(self, author: Author) -> Author: ...


class GenreRepositoryProtocol(Protocol):
    def find_by_id(self, genre_id: GenreId) -> Genre | None: ...

    def find_by_name_ignore_case(self, name: str) -> Genre | None: ...

    def save(self, genre: Genre) -> Genre: ...
