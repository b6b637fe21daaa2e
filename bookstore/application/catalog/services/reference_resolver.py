"""Resolves author and genre references on incoming book payloads."""

from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

import structlog

from bookstore.application.catalog.dtos import NamedReference
from bookstore.application.catalog.protocols import (
    AuthorRepositoryProtocol,
    GenreRepositoryProtocol,
)
from bookstore.domain.catalog.entities import Author, Genre
from bookstore.domain.catalog.exceptions import AuthorNotFoundError, GenreNotFoundError
from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_objects.ids import AuthorId, GenreId

logger = structlog.get_logger(__name__)

E = TypeVar("E", Author, Genre)


class CatalogReferenceResolver:
    """
    Turns ``{id}`` / ``{name}`` references into persisted authors and genres.

    A reference with an id must point at an existing row. A reference
    with only a name reuses the entity whose name matches ignoring case,
    or creates it.
    """

    def __init__(
        self,
        author_repository: AuthorRepositoryProtocol,
        genre_repository: GenreRepositoryProtocol,
    ) -> None:
        self.author_repository = author_repository
        self.genre_repository = genre_repository

    def resolve_authors(self, references: list[NamedReference]) -> list[Author]:
        def by_id(author_id: UUID) -> Author:
            author = self.author_repository.find_by_id(AuthorId(author_id))
            if author is None:
                raise AuthorNotFoundError(author_id)
            return author

        def by_name(name: str) -> Author:
            author = self.author_repository.find_by_name_ignore_case(name)
            if author is None:
                author = self.author_repository.save(Author.create(name))
                logger.info("author_created", author_id=str(author.id), name=author.name)
            return author

        return self._resolve(references, by_id, by_name, "authors")

    def resolve_genres(self, references: list[NamedReference]) -> list[Genre]:
        def by_id(genre_id: UUID) -> Genre:
            genre = self.genre_repository.find_by_id(GenreId(genre_id))
            if genre is None:
                raise GenreNotFoundError(genre_id)
            return genre

        def by_name(name: str) -> Genre:
            genre = self.genre_repository.find_by_name_ignore_case(name)
            if genre is None:
                genre = self.genre_repository.save(Genre.create(name))
                logger.info("genre_created", genre_id=str(genre.id), name=genre.name)
            return genre

        return self._resolve(references, by_id, by_name, "genres")

    @staticmethod
    def _resolve(
        references: list[NamedReference],
        by_id: Callable[[UUID], E],
        by_name: Callable[[str], E],
        field: str,
    ) -> list[E]:
        resolved: list[E] = []
        for ref in references:
            if ref.id is not None:
                entity = by_id(ref.id)
            elif ref.name and ref.name.strip():
                entity = by_name(ref.name.strip())
            else:
                raise ValidationError("Each entry needs an id or a name", field=field)
            if entity not in resolved:
                resolved.append(entity)
        return resolved
