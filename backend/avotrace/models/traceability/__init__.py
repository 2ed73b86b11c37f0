from .farm import Farm
from .lot import Lot, LotStatus
from .lot_activity import LotActivity, ActivityType

__all__ = [
    "Farm",
    "Lot",
    "LotStatus",
    "LotActivity",
    "ActivityType",
]
