"""SQLAlchemy implementation of the UnitOfWork port."""

from sqlalchemy.orm import Session

from bookstore.application.common.unit_of_work import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits or rolls back the request-scoped session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
