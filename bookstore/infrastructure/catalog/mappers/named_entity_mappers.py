from bookstore.domain.catalog.entities import Author, Genre
from bookstore.domain.common.value_objects.ids import AuthorId, GenreId
from bookstore.models import Author as AuthorORM
from bookstore.models import Genre as GenreORM


class AuthorMapper:
    """Mapper for Author ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: AuthorORM) -> Author:
        return Author.create_with_id(
            id=AuthorId(orm_model.id),
            name=orm_model.name,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: Author, orm_model: AuthorORM | None = None) -> AuthorORM:
        if orm_model:
            orm_model.name = domain_entity.name
            return orm_model

        return AuthorORM(
            id=domain_entity.id.value,
            name=domain_entity.name,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )


class GenreMapper:
    """Mapper for Genre ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenreORM) -> Genre:
        return Genre.create_with_id(
            id=GenreId(orm_model.id),
            name=orm_model.name,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: Genre, orm_model: GenreORM | None = None) -> GenreORM:
        if orm_model:
            orm_model.name = domain_entity.name
            return orm_model

        return GenreORM(
            id=domain_entity.id.value,
            name=domain_entity.name,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
