from .warehouse import WarehouseCreate, WarehouseUpdate, WarehouseResponse
from .inventory_item import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse

__all__ = [
    "WarehouseCreate",
    "WarehouseUpdate",
    "WarehouseResponse",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemResponse",
]
