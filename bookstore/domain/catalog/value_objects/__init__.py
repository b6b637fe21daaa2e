from .inventory_adjustment import AdjustmentType, InventoryAdjustment

__all__ = ["AdjustmentType", "InventoryAdjustment"]
