from pydantic import Field
from typing import ClassVar, Optional, Tuple

from avotrace.schemas.common import CamelModel, PatchModel, UtcDateTime


class WarehouseBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=200)
    capacity: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    active: bool = True


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "location", "capacity", "active")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    capacity: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    active: Optional[bool] = None


class WarehouseResponse(WarehouseBase):
    id: int
    code: str
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None
