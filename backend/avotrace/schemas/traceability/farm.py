from pydantic import Field
from typing import ClassVar, Optional, Tuple

from avotrace.schemas.common import CamelModel, PatchModel, UtcDateTime


class FarmBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    code: str = Field(..., min_length=1, max_length=20)
    active: bool = True


class FarmCreate(FarmBase):
    pass


class FarmUpdate(PatchModel):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "location", "code", "active")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    code: Optional[str] = Field(None, min_length=1, max_length=20)
    active: Optional[bool] = None


class FarmResponse(FarmBase):
    id: int
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None
