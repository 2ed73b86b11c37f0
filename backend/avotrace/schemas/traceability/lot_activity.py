from pydantic import Field
from typing import List, Optional

from avotrace.models.traceability.lot_activity import ActivityType
from avotrace.schemas.common import CamelModel, UtcDateTime


class LotActivityCreate(CamelModel):
    activity_type: ActivityType
    date_performed: UtcDateTime
    quantity: int = Field(..., gt=0)
    operator_name: str = Field(..., min_length=1, max_length=200)
    notes: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)


class LotActivityResponse(LotActivityCreate):
    id: int
    lot_id: int
    created_at: Optional[UtcDateTime] = None
