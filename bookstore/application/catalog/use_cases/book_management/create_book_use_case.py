"""Create book use case."""

import structlog

from bookstore.application.catalog.dtos import BookData
from bookstore.application.catalog.protocols import BookRepositoryProtocol, MetricsRecorderProtocol
from bookstore.application.catalog.services import CatalogReferenceResolver
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.catalog.entities import Book
from bookstore.domain.catalog.exceptions import DuplicateIsbnError

logger = structlog.get_logger(__name__)


class CreateBookUseCase:
    """Use case for adding a book to the catalog."""

    def __init__(
        self,
        book_repository: BookRepositoryProtocol,
        reference_resolver: CatalogReferenceResolver,
        metrics: MetricsRecorderProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.book_repository = book_repository
        self.reference_resolver = reference_resolver
        self.metrics = metrics
        self.uow = uow

    def create_book(self, book_data: BookData) -> Book:
        """
        Create a new book.

        Authors and genres given by id must exist; the ones given by name
        are reused or created.

        Raises:
            DuplicateIsbnError: If another book already has the ISBN
            AuthorNotFoundError, GenreNotFoundError: If a referenced id is unknown
        """
        with self.uow:
            if book_data.isbn and self.book_repository.find_by_isbn(book_data.isbn):
                raise DuplicateIsbnError(book_data.isbn)

            authors = self.reference_resolver.resolve_authors(book_data.authors or [])
            genres = self.reference_resolver.resolve_genres(book_data.genres or [])

            book = Book.create(
                title=book_data.title,
                price=book_data.price,
                published_year=book_data.published_year,
                isbn=book_data.isbn,
                authors=authors,
                genres=genres,
                quantity_in_stock=book_data.quantity_in_stock,
                reserved_quantity=book_data.reserved_quantity,
                cost_price=book_data.cost_price,
                supplier_info=book_data.supplier_info,
                reorder_level=book_data.reorder_level,
            )
            book = self.book_repository.save(book)
            self.uow.commit()

        for genre_name in [genre.name for genre in book.genres] or ["unknown"]:
            self.metrics.record_book_created(genre_name)

        logger.info("book_created", book_id=str(book.id), title=book.title)
        return book
