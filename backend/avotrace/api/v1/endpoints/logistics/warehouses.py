"""
Warehouses endpoints
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List

from avotrace.core.database import get_db
from avotrace.core.exceptions import NotFoundError
from avotrace.models.logistics import Warehouse
from avotrace.schemas.logistics import WarehouseCreate, WarehouseUpdate, WarehouseResponse

router = APIRouter()


def next_warehouse_code(db: Session) -> str:
    """WH-NNN, one past the current count, skipping codes already taken"""
    sequence = (db.query(func.count(Warehouse.id)).scalar() or 0) + 1
    code = f"WH-{sequence:03d}"
    while db.query(Warehouse.id).filter(Warehouse.code == code).first():
        sequence += 1
        code = f"WH-{sequence:03d}"
    return code


@router.get("/warehouses", response_model=List[WarehouseResponse])
async def get_warehouses(db: Session = Depends(get_db)):
    return db.query(Warehouse).order_by(Warehouse.id).all()


@router.get("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
async def get_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
    if not warehouse:
        raise NotFoundError("Warehouse", warehouse_id)
    return warehouse


@router.post("/warehouses", response_model=WarehouseResponse, status_code=status.HTTP_201_CREATED)
async def create_warehouse(warehouse: WarehouseCreate, db: Session = Depends(get_db)):
    db_warehouse = Warehouse(**warehouse.dict(), code=next_warehouse_code(db))
    db.add(db_warehouse)
    db.commit()
    db.refresh(db_warehouse)
    return db_warehouse


@router.put("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
async def update_warehouse(warehouse_id: int, warehouse_update: WarehouseUpdate, db: Session = Depends(get_db)):
    db_warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
    if not db_warehouse:
        raise NotFoundError("Warehouse", warehouse_id)

    for field, value in warehouse_update.to_patch().items():
        setattr(db_warehouse, field, value)

    db.commit()
    db.refresh(db_warehouse)
    return db_warehouse


@router.delete("/warehouses/{warehouse_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    db_warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
    if not db_warehouse:
        raise NotFoundError("Warehouse", warehouse_id)

    db.delete(db_warehouse)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
