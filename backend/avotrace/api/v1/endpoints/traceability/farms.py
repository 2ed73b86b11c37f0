"""
Farms endpoints
"""
from fastapi import APIRouter, Depends, Response, status
from typing import List

from avotrace.api.deps import get_repository
from avotrace.core.exceptions import ConflictError, NotFoundError
from avotrace.repositories import TraceabilityRepository
from avotrace.schemas.traceability import FarmCreate, FarmUpdate, FarmResponse

router = APIRouter()


@router.get("/farms", response_model=List[FarmResponse])
async def get_farms(repository: TraceabilityRepository = Depends(get_repository)):
    return repository.get_all_farms()


@router.get("/farms/{farm_id}", response_model=FarmResponse)
async def get_farm(farm_id: int, repository: TraceabilityRepository = Depends(get_repository)):
    farm = repository.get_farm(farm_id)
    if not farm:
        raise NotFoundError("Farm", farm_id)
    return farm


@router.post("/farms", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
async def create_farm(farm: FarmCreate, repository: TraceabilityRepository = Depends(get_repository)):
    """Create a farm; codes are unique regardless of case"""
    if repository.get_farm_by_code(farm.code):
        raise ConflictError(f"Farm code {farm.code} already in use")

    db_farm = repository.create_farm(farm.dict())
    repository.commit()
    return db_farm


@router.put("/farms/{farm_id}", response_model=FarmResponse)
async def update_farm(
    farm_id: int,
    farm_update: FarmUpdate,
    repository: TraceabilityRepository = Depends(get_repository),
):
    update_data = farm_update.to_patch()
    if update_data.get("code"):
        existing = repository.get_farm_by_code(update_data["code"])
        if existing and existing.id != farm_id:
            raise ConflictError(f"Farm code {update_data['code']} already in use")

    db_farm = repository.update_farm(farm_id, update_data)
    if not db_farm:
        raise NotFoundError("Farm", farm_id)
    repository.commit()
    return db_farm


@router.delete("/farms/{farm_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_farm(farm_id: int, repository: TraceabilityRepository = Depends(get_repository)):
    """Delete a farm that has no lots; lots keep their farm for traceability"""
    if not repository.get_farm(farm_id):
        raise NotFoundError("Farm", farm_id)
    lot_count = repository.count_lots_for_farm(farm_id)
    if lot_count:
        raise ConflictError(f"Farm {farm_id} still has {lot_count} lot(s)")

    repository.delete_farm(farm_id)
    repository.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
