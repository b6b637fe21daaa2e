"""Reserve and release stock for pending orders."""

from uuid import UUID

import structlog

from bookstore.application.catalog.protocols import BookRepositoryProtocol, MetricsRecorderProtocol
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.catalog.exceptions import BookNotFoundError
from bookstore.domain.common.value_objects.ids import BookId

logger = structlog.get_logger(__name__)


class ReservationUseCase:
    """Use case for inventory reservations."""

    def __init__(
        self,
        book_repository: BookRepositoryProtocol,
        metrics: MetricsRecorderProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.book_repository = book_repository
        self.metrics = metrics
        self.uow = uow

    def reserve_inventory(self, book_id: UUID, quantity: int) -> None:
        """
        Hold copies of a book.

        Raises:
            BookNotFoundError: If the book does not exist
            InsufficientInventoryError: If fewer than quantity copies are available
        """
        with self.uow:
            book = self.book_repository.find_by_id(BookId(book_id))
            if book is None:
                raise BookNotFoundError(book_id)
            book.reserve(quantity)
            self.book_repository.save(book)
            self.uow.commit()

        self.metrics.record_inventory_reserved(quantity)
        logger.info("inventory_reserved", book_id=str(book_id), quantity=quantity)

    def release_reservation(self, book_id: UUID, quantity: int) -> None:
        """
        Release held copies; releasing more than is held clears the reservation.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        with self.uow:
            book = self.book_repository.find_by_id(BookId(book_id))
            if book is None:
                raise BookNotFoundError(book_id)
            book.release(quantity)
            self.book_repository.save(book)
            self.uow.commit()

        logger.info("inventory_released", book_id=str(book_id), quantity=quantity)
