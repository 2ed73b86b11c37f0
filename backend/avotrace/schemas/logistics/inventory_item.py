from pydantic import Field
from typing import ClassVar, Optional, Tuple
from datetime import date

from avotrace.schemas.common import CamelModel, PatchModel, UtcDateTime


class InventoryItemBase(CamelModel):
    item_type: str = Field(..., min_length=1, max_length=100)
    item_name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=20)
    entry_date: date = Field(default_factory=date.today)
    supplier: Optional[str] = None
    is_paid: bool = False
    notes: Optional[str] = None


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("item_type", "item_name", "quantity", "unit", "entry_date", "is_paid")

    item_type: Optional[str] = Field(None, min_length=1, max_length=100)
    item_name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    entry_date: Optional[date] = None
    supplier: Optional[str] = None
    is_paid: Optional[bool] = None
    notes: Optional[str] = None


class InventoryItemResponse(InventoryItemBase):
    id: int
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None
