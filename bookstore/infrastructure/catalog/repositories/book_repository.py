from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.orm import Session

from bookstore.application.catalog.protocols import BookSearchCriteria
from bookstore.application.common.pagination import Pagination
from bookstore.application.common.sorting import SortOrder
from bookstore.domain.catalog.entities import Book
from bookstore.domain.common.value_objects.ids import BookId
from bookstore.infrastructure.catalog.mappers import BookMapper
from bookstore.models import Author as AuthorORM
from bookstore.models import Book as BookORM
from bookstore.models import Genre as GenreORM

_SORT_COLUMNS = {
    "title": BookORM.title,
    "price": BookORM.price,
    "published_year": BookORM.published_year,
}

_available = BookORM.quantity_in_stock - BookORM.reserved_quantity


class BookRepository:
    """Domain-centric repository for Book persistence."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BookMapper()

    def find_by_id(self, book_id: BookId) -> Book | None:
        """Find book by ID, authors and genres included."""
        orm_model = self.db.get(BookORM, book_id.value)
        if not orm_model:
            return None
        return self.mapper.to_domain(orm_model)

    def find_by_isbn(self, isbn: str) -> Book | None:
        stmt = select(BookORM).where(BookORM.isbn == isbn)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            return None
        return self.mapper.to_domain(orm_model)

    def save(self, book: Book) -> Book:
        """Persist book to database."""
        existing_orm = self.db.get(BookORM, book.id.value)
        if existing_orm is None:
            # Create new
            orm_model = self.mapper.to_orm(book, self.db)
            self.db.add(orm_model)
            self.db.flush()
            return self.mapper.to_domain(orm_model)
        # Update existing
        self.mapper.to_orm(book, self.db, existing_orm)
        self.db.flush()
        return self.mapper.to_domain(existing_orm)

    def delete_by_id(self, book_id: BookId) -> int:
        """
        Hard delete a book.

        Returns:
            Number of deleted rows (0 when the book did not exist)
        """
        orm_model = self.db.get(BookORM, book_id.value)
        if orm_model is None:
            return 0
        self.db.delete(orm_model)
        self.db.flush()
        return 1

    def search(
        self, criteria: BookSearchCriteria, pagination: Pagination, sort: SortOrder
    ) -> tuple[list[Book], int]:
        """
        Search books with optional case-insensitive substring filters.

        Author and genre filters use EXISTS subqueries so a book matching
        several authors is still returned once.

        Returns:
            Tuple of (books on the requested page, total matching books)
        """
        conditions = self._search_conditions(criteria)

        count_stmt = select(func.count()).select_from(BookORM).where(*conditions)
        total = self.db.execute(count_stmt).scalar() or 0

        column = _SORT_COLUMNS[sort.field]
        order = column.desc() if sort.descending else column.asc()
        stmt = (
            select(BookORM)
            .where(*conditions)
            .order_by(order, BookORM.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()

        return [self.mapper.to_domain(m) for m in orm_models], total

    def find_needing_restock(self) -> list[Book]:
        stmt = select(BookORM).where(_available <= BookORM.reorder_level).order_by(BookORM.title)
        return [self.mapper.to_domain(m) for m in self.db.execute(stmt).scalars().all()]

    def find_low_stock(self, threshold: int) -> list[Book]:
        stmt = select(BookORM).where(_available <= threshold).order_by(_available, BookORM.title)
        return [self.mapper.to_domain(m) for m in self.db.execute(stmt).scalars().all()]

    def find_available_by_popularity(self, limit: int) -> list[Book]:
        stmt = (
            select(BookORM)
            .where(_available > 0)
            .order_by(BookORM.view_count.desc(), BookORM.title)
            .limit(limit)
        )
        return [self.mapper.to_domain(m) for m in self.db.execute(stmt).scalars().all()]

    def increment_view_count(self, book_id: BookId) -> None:
        """Atomically bump the view counter without touching the row version."""
        stmt = (
            update(BookORM)
            .where(BookORM.id == book_id.value)
            .values(view_count=BookORM.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(BookORM)).scalar() or 0

    @staticmethod
    def _search_conditions(criteria: BookSearchCriteria) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if criteria.title and criteria.title.strip():
            conditions.append(BookORM.title.icontains(criteria.title.strip(), autoescape=True))
        if criteria.author and criteria.author.strip():
            conditions.append(
                BookORM.authors.any(
                    AuthorORM.name.icontains(criteria.author.strip(), autoescape=True)
                )
            )
        if criteria.genre and criteria.genre.strip():
            conditions.append(
                BookORM.genres.any(GenreORM.name.icontains(criteria.genre.strip(), autoescape=True))
            )
        return conditions
