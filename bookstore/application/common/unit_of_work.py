"""
Unit of Work interface.

Groups repository writes into a single transaction so a use case either
persists all of its changes or none of them.

Example:
    class BulkAdjustUseCase:
        def __init__(self, repo: BookRepositoryProtocol, uow: UnitOfWork) -> None:
            self._repo = repo
            self._uow = uow

        def run(self, adjustments: list[InventoryAdjustment]) -> None:
            with self._uow:
                for adjustment in adjustments:
                    ...
                self._uow.commit()
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    Infrastructure provides the concrete implementation
    (SQLAlchemyUnitOfWork).
    """

    @abstractmethod
    def commit(self) -> None:
        """Commit the current transaction."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Discard all changes made within the unit of work."""
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """
        Exit the unit of work context.

        If an exception occurred, rollback. Otherwise, do nothing
        (commit must be called explicitly).
        """
        if exc_type is not None:
            self.rollback()
