"""Repositories for the small name-keyed catalog entities."""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookstore.domain.catalog.entities import Author, Genre
from bookstore.domain.common.entity import EntityId
from bookstore.infrastructure.catalog.mappers import AuthorMapper, GenreMapper
from bookstore.models import Author as AuthorORM
from bookstore.models import Genre as GenreORM

EntityT = TypeVar("EntityT", Author, Genre)
ModelT = TypeVar("ModelT", AuthorORM, GenreORM)


class NamedEntityRepository(Generic[EntityT, ModelT]):
    """Shared lookups for entities identified by a case-insensitive name."""

    model: type[ModelT]

    def __init__(self, db: Session, mapper: AuthorMapper | GenreMapper) -> None:
        self.db = db
        self.mapper = mapper

    def find_by_id(self, entity_id: EntityId) -> EntityT | None:
        orm_model = self.db.get(self.model, entity_id.value)
        if not orm_model:
            return None
        return self.mapper.to_domain(orm_model)  # type: ignore[arg-type, return-value]

    def find_by_name_ignore_case(self, name: str) -> EntityT | None:
        stmt = (
            select(self.model)
            .where(func.lower(self.model.name) == name.strip().lower())
            .order_by(self.model.created_at)
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            return None
        return self.mapper.to_domain(orm_model)  # type: ignore[arg-type, return-value]

    def save(self, entity: EntityT) -> EntityT:
        existing = self.db.get(self.model, entity.id.value)
        orm_model = self.mapper.to_orm(entity, existing)  # type: ignore[arg-type]
        if existing is None:
            self.db.add(orm_model)
        self.db.flush()
        return self.mapper.to_domain(orm_model)  # type: ignore[arg-type, return-value]


class AuthorRepository(NamedEntityRepository[Author, AuthorORM]):
    model = AuthorORM

    def __init__(self, db: Session) -> None:
        super().__init__(db, AuthorMapper())


class GenreRepository(NamedEntityRepository[Genre, GenreORM]):
    model = GenreORM

    def __init__(self, db: Session) -> None:
        super().__init__(db, GenreMapper())
