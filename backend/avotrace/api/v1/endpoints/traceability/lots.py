"""
Lots endpoints
"""
from datetime import date, datetime, time
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status

from avotrace.api.deps import get_lifecycle_service, get_repository
from avotrace.core.exceptions import NotFoundError, ValidationError
from avotrace.models.traceability import LotStatus
from avotrace.repositories import TraceabilityRepository
from avotrace.schemas.traceability import LotCreate, LotUpdate, LotResponse
from avotrace.services.lot_lifecycle import LotLifecycleService

router = APIRouter()


@router.get("/lots", response_model=List[LotResponse])
async def get_lots(
    farm_id: Optional[int] = Query(None, alias="farmId"),
    lot_status: Optional[LotStatus] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    repository: TraceabilityRepository = Depends(get_repository),
):
    """
    List lots, newest first.

    The harvest date range applies only when both startDate and endDate are
    given; both days are included.
    """
    harvested_from = harvested_to = None
    if start_date and end_date:
        if start_date > end_date:
            raise ValidationError.for_field("startDate", "startDate must not be after endDate")
        harvested_from = datetime.combine(start_date, time.min)
        harvested_to = datetime.combine(end_date, time.max)

    return repository.list_lots(
        farm_id=farm_id,
        status=lot_status.value if lot_status else None,
        harvested_from=harvested_from,
        harvested_to=harvested_to,
    )


@router.get("/lots/number/{lot_number}", response_model=LotResponse)
async def get_lot_by_number(lot_number: str, repository: TraceabilityRepository = Depends(get_repository)):
    """Lookup used by barcode scanners"""
    lot = repository.get_lot_by_number(lot_number)
    if not lot:
        raise NotFoundError("Lot", lot_number)
    return lot


@router.get("/lots/{lot_id}", response_model=LotResponse)
async def get_lot(lot_id: int, service: LotLifecycleService = Depends(get_lifecycle_service)):
    return service.get_lot(lot_id)


@router.post("/lots", response_model=LotResponse, status_code=status.HTTP_201_CREATED)
async def create_lot(
    lot: LotCreate,
    x_operator_name: Optional[str] = Header(None),
    service: LotLifecycleService = Depends(get_lifecycle_service),
):
    """
    Create a lot. Without lotNumber one is assigned (AV-YYMMDD-NNN) and the
    initial activity is recorded for the operator named in X-Operator-Name.
    """
    return service.create_lot(lot.dict(), operator_name=x_operator_name)


@router.put("/lots/{lot_id}", response_model=LotResponse)
async def update_lot(
    lot_id: int,
    lot_update: LotUpdate,
    service: LotLifecycleService = Depends(get_lifecycle_service),
):
    return service.update_lot(lot_id, lot_update.to_patch())
