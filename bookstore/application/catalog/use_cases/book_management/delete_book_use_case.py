"""Delete book use case."""

from uuid import UUID

import structlog

from bookstore.application.catalog.protocols import BookRepositoryProtocol
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.common.value_objects.ids import BookId

logger = structlog.get_logger(__name__)


class DeleteBookUseCase:
    """Use case for removing a book. Deleting a missing book is not an error."""

    def __init__(self, book_repository: BookRepositoryProtocol, uow: UnitOfWork) -> None:
        self.book_repository = book_repository
        self.uow = uow

    def delete_book(self, book_id: UUID) -> None:
        with self.uow:
            deleted = self.book_repository.delete_by_id(BookId(book_id))
            self.uow.commit()

        if deleted:
            logger.info("book_deleted", book_id=str(book_id))
        else:
            logger.debug("book_delete_noop", book_id=str(book_id))
