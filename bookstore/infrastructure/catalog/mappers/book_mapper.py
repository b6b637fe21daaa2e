from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.domain.catalog.entities import Book
from bookstore.domain.common.value_objects.ids import BookId
from bookstore.infrastructure.catalog.mappers.named_entity_mappers import AuthorMapper, GenreMapper
from bookstore.models import Author as AuthorORM
from bookstore.models import Book as BookORM
from bookstore.models import Genre as GenreORM


class BookMapper:
    """
    Mapper for Book ORM ↔ Domain conversion.

    The version column is never written from the domain side; SQLAlchemy
    bumps it on every flush of a changed row. The view counter is only
    changed through an atomic UPDATE in the repository.
    """

    def __init__(self) -> None:
        self.author_mapper = AuthorMapper()
        self.genre_mapper = GenreMapper()

    def to_domain(self, orm_model: BookORM) -> Book:
        """Convert ORM model to domain entity."""
        return Book.create_with_id(
            id=BookId(orm_model.id),
            title=orm_model.title,
            price=orm_model.price,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
            published_year=orm_model.published_year,
            isbn=orm_model.isbn,
            authors=[self.author_mapper.to_domain(a) for a in orm_model.authors],
            genres=[self.genre_mapper.to_domain(g) for g in orm_model.genres],
            quantity_in_stock=orm_model.quantity_in_stock,
            reserved_quantity=orm_model.reserved_quantity,
            cost_price=orm_model.cost_price,
            supplier_info=orm_model.supplier_info,
            reorder_level=orm_model.reorder_level,
            view_count=orm_model.view_count,
            version=orm_model.version,
        )

    def to_orm(self, domain_entity: Book, db: Session, orm_model: BookORM | None = None) -> BookORM:
        """
        Convert domain entity to ORM model.

        Authors and genres must already be persisted; they are attached by id.
        """
        if orm_model is None:
            orm_model = BookORM(id=domain_entity.id.value, created_at=domain_entity.created_at)

        orm_model.title = domain_entity.title
        orm_model.price = domain_entity.price
        orm_model.published_year = domain_entity.published_year
        orm_model.isbn = domain_entity.isbn
        orm_model.quantity_in_stock = domain_entity.quantity_in_stock
        orm_model.reserved_quantity = domain_entity.reserved_quantity
        orm_model.cost_price = domain_entity.cost_price
        orm_model.supplier_info = domain_entity.supplier_info
        orm_model.reorder_level = domain_entity.reorder_level
        orm_model.updated_at = domain_entity.updated_at

        author_ids = [a.id.value for a in domain_entity.authors]
        genre_ids = [g.id.value for g in domain_entity.genres]
        if [a.id for a in orm_model.authors] != author_ids:
            orm_model.authors = self._load(db, AuthorORM, author_ids)
        if [g.id for g in orm_model.genres] != genre_ids:
            orm_model.genres = self._load(db, GenreORM, genre_ids)
        return orm_model

    @staticmethod
    def _load(db: Session, model: type[AuthorORM] | type[GenreORM], ids: list) -> list:
        if not ids:
            return []
        rows = {row.id: row for row in db.execute(select(model).where(model.id.in_(ids))).scalars()}
        return [rows[i] for i in ids if i in rows]
