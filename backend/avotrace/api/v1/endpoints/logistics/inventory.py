"""
Inventory endpoints (supplies entering the packing station)
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional

from avotrace.core.database import get_db
from avotrace.core.exceptions import NotFoundError
from avotrace.models.logistics import InventoryItem
from avotrace.schemas.logistics import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse

router = APIRouter()


@router.get("/inventory", response_model=List[InventoryItemResponse])
async def get_inventory(
    search: Optional[str] = Query(None, description="Matches item name, type or supplier"),
    db: Session = Depends(get_db),
):
    query = db.query(InventoryItem)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                InventoryItem.item_name.ilike(pattern),
                InventoryItem.item_type.ilike(pattern),
                InventoryItem.supplier.ilike(pattern),
            )
        )
    return query.order_by(InventoryItem.entry_date.desc(), InventoryItem.id.desc()).all()


@router.get("/inventory/{item_id}", response_model=InventoryItemResponse)
async def get_inventory_item(item_id: int, db: Session = Depends(get_db)):
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not item:
        raise NotFoundError("Inventory item", item_id)
    return item


@router.post("/inventory", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(item: InventoryItemCreate, db: Session = Depends(get_db)):
    db_item = InventoryItem(**item.dict())
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


@router.put("/inventory/{item_id}", response_model=InventoryItemResponse)
async def update_inventory_item(item_id: int, item_update: InventoryItemUpdate, db: Session = Depends(get_db)):
    db_item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not db_item:
        raise NotFoundError("Inventory item", item_id)

    for field, value in item_update.to_patch().items():
        setattr(db_item, field, value)

    db.commit()
    db.refresh(db_item)
    return db_item


@router.delete("/inventory/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(item_id: int, db: Session = Depends(get_db)):
    db_item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
    if not db_item:
        raise NotFoundError("Inventory item", item_id)

    db.delete(db_item)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
