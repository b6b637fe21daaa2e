"""API routes for the book catalog."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response, status

from bookstore.application.catalog.protocols import BookSearchCriteria
from bookstore.application.catalog.use_cases.book_management import (
    CreateBookUseCase,
    DeleteBookUseCase,
    GetBookUseCase,
    UpdateBookUseCase,
)
from bookstore.application.catalog.use_cases.book_queries import (
    DEFAULT_POPULAR_LIMIT,
    GetPopularBooksUseCase,
    SearchBooksUseCase,
)
from bookstore.application.common.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Pagination
from bookstore.application.common.sorting import DEFAULT_SORT
from bookstore.core import container
from bookstore.infrastructure.catalog.schemas import BookRequest, BookResponse
from bookstore.infrastructure.common.di import inject_use_case
from bookstore.infrastructure.common.rate_limiting import api_rate_limit
from bookstore.infrastructure.common.schemas import DataResponse, PagedResponse, PageMeta
from bookstore.infrastructure.identity.dependencies import AdminPrincipal, ReaderPrincipal

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.post(
    "",
    response_model=DataResponse[BookResponse],
    status_code=status.HTTP_201_CREATED,
)
@api_rate_limit
def create_book(
    request: Request,
    response: Response,
    book: BookRequest,
    principal: AdminPrincipal,
    use_case: Annotated[CreateBookUseCase, Depends(inject_use_case(container.create_book_use_case))],
) -> DataResponse[BookResponse]:
    """
    Create a book.

    Authors and genres may be given by id (they must exist) or by name
    (matched case-insensitively, created when missing).

    Raises:
        DuplicateResourceError: 409 if the ISBN is already used
        EntityNotFoundError: 404 if a referenced author or genre id is unknown
    """
    created = use_case.create_book(book.to_book_data())
    response.headers["Location"] = f"{request.url.path}/{created.id.value}"
    return DataResponse(data=BookResponse.from_domain(created))


@router.get("", response_model=PagedResponse[BookResponse])
@api_rate_limit
def search_books(
    request: Request,
    response: Response,
    principal: ReaderPrincipal,
    use_case: Annotated[
        SearchBooksUseCase, Depends(inject_use_case(container.search_books_use_case))
    ],
    title: Annotated[str | None, Query(max_length=255)] = None,
    author: Annotated[str | None, Query(max_length=255)] = None,
    genre: Annotated[str | None, Query(max_length=255)] = None,
    page: Annotated[int, Query(ge=0, description="Zero-based page number")] = 0,
    size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    sort: Annotated[str, Query(description="field,direction")] = DEFAULT_SORT,
) -> PagedResponse[BookResponse]:
    """
    Search books by title, author name or genre name.

    Every filter is an optional case-insensitive substring match; results
    are paged and sorted by ``title``, ``price`` or ``published_year``.
    """
    result = use_case.search_books(
        BookSearchCriteria(title=title, author=author, genre=genre),
        Pagination(page=page, size=size),
        sort,
    )
    return PagedResponse(
        data=[BookResponse.from_domain(b) for b in result.items],
        meta=PageMeta.from_result(result),
    )


@router.get("/popular", response_model=DataResponse[list[BookResponse]])
@api_rate_limit
def get_popular_books(
    request: Request,
    response: Response,
    principal: ReaderPrincipal,
    use_case: Annotated[
        GetPopularBooksUseCase, Depends(inject_use_case(container.get_popular_books_use_case))
    ],
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_POPULAR_LIMIT,
) -> DataResponse[list[BookResponse]]:
    """Get in-stock books, most viewed first."""
    books = use_case.get_popular_books(limit)
    return DataResponse(data=[BookResponse.from_domain(b) for b in books])


@router.get("/{book_id}", response_model=DataResponse[BookResponse])
@api_rate_limit
def get_book(
    request: Request,
    response: Response,
    book_id: UUID,
    principal: ReaderPrincipal,
    use_case: Annotated[GetBookUseCase, Depends(inject_use_case(container.get_book_use_case))],
) -> DataResponse[BookResponse]:
    """Get a book by id; every successful read counts as a view."""
    book = use_case.get_book(book_id)
    return DataResponse(data=BookResponse.from_domain(book))


@router.put("/{book_id}", response_model=DataResponse[BookResponse])
@api_rate_limit
def update_book(
    request: Request,
    response: Response,
    book_id: UUID,
    book: BookRequest,
    principal: AdminPrincipal,
    use_case: Annotated[UpdateBookUseCase, Depends(inject_use_case(container.update_book_use_case))],
) -> DataResponse[BookResponse]:
    """
    Replace a book's details.

    Omitted authors, genres or inventory fields keep their stored values.

    Raises:
        IdMismatchError: 400 if the body id is missing or differs from the path id
        EntityNotFoundError: 404 if the book does not exist
        DuplicateResourceError: 409 if the ISBN belongs to another book
    """
    updated = use_case.update_book(book_id, book.to_book_data())
    return DataResponse(data=BookResponse.from_domain(updated))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def delete_book(
    request: Request,
    response: Response,
    book_id: UUID,
    principal: AdminPrincipal,
    use_case: Annotated[DeleteBookUseCase, Depends(inject_use_case(container.delete_book_use_case))],
) -> None:
    """Delete a book. Deleting a missing book is not an error."""
    use_case.delete_book(book_id)
