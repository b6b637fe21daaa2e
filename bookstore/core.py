from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from bookstore.application.catalog.services import CatalogReferenceResolver
from bookstore.application.catalog.use_cases.book_management import (
    CreateBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    UpdateBookUseCase,
)
from bookstore.application.catalog.use_cases.book_queries import (
    GetPopularBooksUseCase,
    SearchBooksUseCase,
)
from bookstore.application.identity.use_cases import AuthenticationUseCase
from bookstore.application.inventory.use_cases import (
    InventoryQueryUseCase,
    ReservationUseCase,
    StockManagementUseCase,
)
from bookstore.config import get_settings
from bookstore.infrastructure.catalog.repositories import (
    AuthorRepository,
    BookRepository,
    GenreRepository,
)
from bookstore.infrastructure.common.unit_of_work import SQLAlchemyUnitOfWork
from bookstore.infrastructure.identity.services import (
    InMemoryUserDirectory,
    PasswordServiceAdapter,
    TokenServiceAdapter,
)
from bookstore.infrastructure.observability.metrics import PrometheusMetricsRecorder


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Infrastructure
    uow = providers.Factory(SQLAlchemyUnitOfWork, db=db)
    metrics_recorder = providers.Singleton(PrometheusMetricsRecorder)

    # Repositories
    book_repository = providers.Factory(BookRepository, db=db)
    author_repository = providers.Factory(AuthorRepository, db=db)
    genre_repository = providers.Factory(GenreRepository, db=db)

    # Identity services
    user_directory = providers.Singleton(InMemoryUserDirectory, settings=settings)
    password_service = providers.Singleton(PasswordServiceAdapter)
    token_service = providers.Singleton(TokenServiceAdapter)

    # Application services
    reference_resolver = providers.Factory(
        CatalogReferenceResolver,
        author_repository=author_repository,
        genre_repository=genre_repository,
    )

    # Catalog use cases
    create_book_use_case = providers.Factory(
        CreateBookUseCase,
        book_repository=book_repository,
        reference_resolver=reference_resolver,
        metrics=metrics_recorder,
        uow=uow,
    )
    get_book_use_case = providers.Factory(
        GetBookUseCase,
        book_repository=book_repository,
        metrics=metrics_recorder,
        uow=uow,
    )
    update_book_use_case = providers.Factory(
        UpdateBookUseCase,
        book_repository=book_repository,
        reference_resolver=reference_resolver,
        uow=uow,
    )
    delete_book_use_case = providers.Factory(
        DeleteBookUseCase, book_repository=book_repository, uow=uow
    )
    search_books_use_case = providers.Factory(SearchBooksUseCase, book_repository=book_repository)
    get_popular_books_use_case = providers.Factory(
        GetPopularBooksUseCase, book_repository=book_repository
    )

    # Inventory use cases
    reservation_use_case = providers.Factory(
        ReservationUseCase,
        book_repository=book_repository,
        metrics=metrics_recorder,
        uow=uow,
    )
    stock_management_use_case = providers.Factory(
        StockManagementUseCase, book_repository=book_repository, uow=uow
    )
    inventory_query_use_case = providers.Factory(
        InventoryQueryUseCase, book_repository=book_repository
    )

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_directory=user_directory,
        password_service=password_service,
        token_service=token_service,
    )


container = Container()
