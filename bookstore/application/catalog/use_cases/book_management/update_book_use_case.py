"""Update book use case."""

from uuid import UUID

import structlog

from bookstore.application.catalog.dtos import BookData
from bookstore.application.catalog.protocols import BookRepositoryProtocol
from bookstore.application.catalog.services import CatalogReferenceResolver
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.catalog.entities import Book
from bookstore.domain.catalog.exceptions import (
    BookNotFoundError,
    DuplicateIsbnError,
    IdMismatchError,
)
from bookstore.domain.common.value_objects.ids import BookId

logger = structlog.get_logger(__name__)


class UpdateBookUseCase:
    """Use case for replacing a book's data."""

    def __init__(
        self,
        book_repository: BookRepositoryProtocol,
        reference_resolver: CatalogReferenceResolver,
        uow: UnitOfWork,
    ) -> None:
        self.book_repository = book_repository
        self.reference_resolver = reference_resolver
        self.uow = uow

    def update_book(self, book_id: UUID, book_data: BookData) -> Book:
        """
        Update an existing book.

        Catalog fields are replaced. Authors and genres are replaced only
        when the payload carries them, and inventory fields left out keep
        their stored values.

        Args:
            book_id: ID from the request path
            book_data: Submitted book; its id must match book_id

        Returns:
            The updated book

        Raises:
            IdMismatchError: If the body id is missing or differs from the path id
            BookNotFoundError: If the book does not exist
            DuplicateIsbnError: If another book already has the ISBN
        """
        if book_data.id != book_id:
            raise IdMismatchError(book_id, book_data.id)

        book_id_vo = BookId(book_id)

        with self.uow:
            book = self.book_repository.find_by_id(book_id_vo)
            if book is None:
                raise BookNotFoundError(book_id)

            if book_data.isbn:
                holder = self.book_repository.find_by_isbn(book_data.isbn)
                if holder is not None and holder.id != book.id:
                    raise DuplicateIsbnError(book_data.isbn)

            book.update_details(
                title=book_data.title,
                price=book_data.price,
                published_year=book_data.published_year,
                isbn=book_data.isbn,
            )
            book.update_inventory(
                quantity_in_stock=book_data.quantity_in_stock,
                reserved_quantity=book_data.reserved_quantity,
                cost_price=book_data.cost_price,
                supplier_info=book_data.supplier_info,
                reorder_level=book_data.reorder_level,
            )
            if book_data.authors is not None:
                book.replace_authors(self.reference_resolver.resolve_authors(book_data.authors))
            if book_data.genres is not None:
                book.replace_genres(self.reference_resolver.resolve_genres(book_data.genres))

            book = self.book_repository.save(book)
            self.uow.commit()

        logger.info("book_updated", book_id=str(book_id))
        return book
