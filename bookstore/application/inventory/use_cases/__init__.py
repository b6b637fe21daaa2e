from .inventory_query_use_case import InventoryQueryUseCase, InventorySnapshot
from .reservation_use_case import ReservationUseCase
from .stock_management_use_case import StockManagementUseCase

__all__ = [
    "InventoryQueryUseCase",
    "InventorySnapshot",
    "ReservationUseCase",
    "StockManagementUseCase",
]
