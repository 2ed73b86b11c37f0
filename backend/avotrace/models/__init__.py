"""
AvoTrace models
"""
from .traceability import Farm, Lot, LotStatus, LotActivity, ActivityType
from .logistics import Warehouse, InventoryItem
from .user import User, UserRole

__all__ = [
    "Farm",
    "Lot",
    "LotStatus",
    "LotActivity",
    "ActivityType",
    "Warehouse",
    "InventoryItem",
    "User",
    "UserRole",
]
