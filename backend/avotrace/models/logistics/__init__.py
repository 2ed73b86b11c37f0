from .warehouse import Warehouse
from .inventory_item import InventoryItem

__all__ = [
    "Warehouse",
    "InventoryItem",
]
