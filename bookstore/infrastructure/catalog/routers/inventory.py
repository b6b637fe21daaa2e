"""API routes for stock reservations, adjustments and inventory reports."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from bookstore.application.inventory.use_cases import (
    InventoryQueryUseCase,
    ReservationUseCase,
    StockManagementUseCase,
)
from bookstore.application.inventory.use_cases.inventory_query_use_case import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from bookstore.core import container
from bookstore.infrastructure.catalog.schemas import BookResponse, InventoryAdjustmentRequest
from bookstore.infrastructure.common.di import inject_use_case
from bookstore.infrastructure.common.rate_limiting import api_rate_limit
from bookstore.infrastructure.common.schemas import DataResponse
from bookstore.infrastructure.identity.dependencies import AdminPrincipal, ReaderPrincipal

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.post("/{book_id}/reserve", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def reserve_inventory(
    request: Request,
    response: Response,
    book_id: UUID,
    quantity: Annotated[int, Query(ge=1)],
    principal: ReaderPrincipal,
    use_case: Annotated[
        ReservationUseCase, Depends(inject_use_case(container.reservation_use_case))
    ],
) -> None:
    """
    Hold copies of a book for a pending order.

    Raises:
        InsufficientInventoryError: 409 if fewer copies are available
    """
    use_case.reserve_inventory(book_id, quantity)


@router.delete("/{book_id}/reservation", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def release_reservation(
    request: Request,
    response: Response,
    book_id: UUID,
    quantity: Annotated[int, Query(ge=1)],
    principal: ReaderPrincipal,
    use_case: Annotated[
        ReservationUseCase, Depends(inject_use_case(container.reservation_use_case))
    ],
) -> None:
    """Give back reserved copies; releasing more than is reserved clears the reservation."""
    use_case.release_reservation(book_id, quantity)


@router.post("/{book_id}/adjust", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def adjust_inventory(
    request: Request,
    response: Response,
    book_id: UUID,
    adjustment: InventoryAdjustmentRequest,
    principal: AdminPrincipal,
    use_case: Annotated[
        StockManagementUseCase, Depends(inject_use_case(container.stock_management_use_case))
    ],
) -> None:
    """
    Apply a signed stock movement to a book.

    Raises:
        InvalidInventoryAdjustmentError: 400 if stock would drop below zero
    """
    use_case.adjust_inventory(book_id, adjustment.to_domain(book_id))


@router.post("/bulk-adjust", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def bulk_adjust_inventory(
    request: Request,
    response: Response,
    adjustments: list[InventoryAdjustmentRequest],
    principal: AdminPrincipal,
    use_case: Annotated[
        StockManagementUseCase, Depends(inject_use_case(container.stock_management_use_case))
    ],
) -> None:
    """Apply several adjustments in one transaction; any failure applies none of them."""
    use_case.bulk_inventory_update([a.to_domain() for a in adjustments])


@router.get("/restock-needed", response_model=DataResponse[list[BookResponse]])
@api_rate_limit
def get_books_needing_restock(
    request: Request,
    response: Response,
    principal: AdminPrincipal,
    use_case: Annotated[
        InventoryQueryUseCase, Depends(inject_use_case(container.inventory_query_use_case))
    ],
) -> DataResponse[list[BookResponse]]:
    """Books whose available quantity is at or below their reorder level."""
    books = use_case.get_books_needing_restock()
    return DataResponse(data=[BookResponse.from_domain(b) for b in books])


@router.get("/low-stock", response_model=DataResponse[list[BookResponse]])
@api_rate_limit
def get_low_stock_books(
    request: Request,
    response: Response,
    principal: AdminPrincipal,
    use_case: Annotated[
        InventoryQueryUseCase, Depends(inject_use_case(container.inventory_query_use_case))
    ],
    threshold: Annotated[int, Query(ge=0)] = DEFAULT_LOW_STOCK_THRESHOLD,
) -> DataResponse[list[BookResponse]]:
    books = use_case.get_low_stock_books(threshold)
    return DataResponse(data=[BookResponse.from_domain(b) for b in books])


@router.put("/{book_id}/reorder-level", status_code=status.HTTP_204_NO_CONTENT)
@api_rate_limit
def update_reorder_level(
    request: Request,
    response: Response,
    book_id: UUID,
    level: Annotated[int, Query(ge=0)],
    principal: AdminPrincipal,
    use_case: Annotated[
        StockManagementUseCase, Depends(inject_use_case(container.stock_management_use_case))
    ],
) -> None:
    use_case.update_reorder_level(book_id, level)
