"""
Lot activities endpoints (append-only)
"""
from fastapi import APIRouter, Depends, status
from typing import List

from avotrace.api.deps import get_lifecycle_service
from avotrace.schemas.traceability import LotActivityCreate, LotActivityResponse
from avotrace.services.lot_lifecycle import LotLifecycleService

router = APIRouter()


@router.get("/lots/{lot_id}/activities", response_model=List[LotActivityResponse])
async def get_lot_activities(lot_id: int, service: LotLifecycleService = Depends(get_lifecycle_service)):
    return service.get_activities(lot_id)


@router.post(
    "/lots/{lot_id}/activities",
    response_model=LotActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_lot_activity(
    lot_id: int,
    activity: LotActivityCreate,
    service: LotLifecycleService = Depends(get_lifecycle_service),
):
    """Record an activity; the lot moves to the matching status"""
    return service.record_activity(lot_id, **activity.dict())
