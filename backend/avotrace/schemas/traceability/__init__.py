from .farm import FarmCreate, FarmUpdate, FarmResponse
from .lot import LotCreate, LotUpdate, LotResponse, BarcodeResponse
from .lot_activity import LotActivityCreate, LotActivityResponse

__all__ = [
    "FarmCreate",
    "FarmUpdate",
    "FarmResponse",
    "LotCreate",
    "LotUpdate",
    "LotResponse",
    "BarcodeResponse",
    "LotActivityCreate",
    "LotActivityResponse",
]
