"""Logistics Module - Router aggregation"""
from fastapi import APIRouter

from .warehouses import router as warehouses_router
from .inventory import router as inventory_router

router = APIRouter(tags=["logistics"])

router.include_router(warehouses_router)
router.include_router(inventory_router)
