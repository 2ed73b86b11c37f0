from pydantic import Field
from typing import ClassVar, Optional, Tuple

from avotrace.models.traceability.lot import LotStatus
from avotrace.schemas.common import CamelModel, PatchModel, UtcDateTime


class LotCreate(CamelModel):
    # Assigned by the lot number generator when omitted
    lot_number: Optional[str] = Field(None, min_length=1, max_length=20)
    farm_id: int
    harvest_date: UtcDateTime
    initial_quantity: int = Field(..., gt=0)
    current_status: LotStatus = LotStatus.HARVESTED
    notes: Optional[str] = None


class LotUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("harvest_date", "initial_quantity")

    harvest_date: Optional[UtcDateTime] = None
    initial_quantity: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None


class LotResponse(CamelModel):
    id: int
    lot_number: str
    farm_id: int
    harvest_date: UtcDateTime
    initial_quantity: int
    current_status: LotStatus
    notes: Optional[str] = None
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None


class BarcodeResponse(CamelModel):
    barcode_image: str
    lot_number: str
    farm_name: str
    harvest_date: str
