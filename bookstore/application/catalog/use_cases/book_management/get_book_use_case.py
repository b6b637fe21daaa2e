"""Get book use case."""

from uuid import UUID

from bookstore.application.catalog.protocols import BookRepositoryProtocol, MetricsRecorderProtocol
from bookstore.application.common.unit_of_work import UnitOfWork
from bookstore.domain.catalog.entities import Book
from bookstore.domain.catalog.exceptions import BookNotFoundError
from bookstore.domain.common.value_objects.ids import BookId


class GetBookUseCase:
    """Use case for reading a single book; every read counts as a view."""

    def __init__(
        self,
        book_repository: BookRepositoryProtocol,
        metrics: MetricsRecorderProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.book_repository = book_repository
        self.metrics = metrics
        self.uow = uow

    def get_book(self, book_id: UUID) -> Book:
        """
        Fetch a book and record the view.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        book_id_vo = BookId(book_id)

        with self.uow:
            if self.book_repository.find_by_id(book_id_vo) is None:
                raise BookNotFoundError(book_id)
            self.book_repository.increment_view_count(book_id_vo)
            self.uow.commit()

        book = self.book_repository.find_by_id(book_id_vo)
        if book is None:
            raise BookNotFoundError(book_id)

        self.metrics.record_book_viewed(book.primary_genre_name())
        return book
