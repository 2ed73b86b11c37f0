"""Traceability Module - Router aggregation"""
from fastapi import APIRouter

from .farms import router as farms_router
from .lots import router as lots_router
from .activities import router as activities_router
from .documents import router as documents_router

router = APIRouter(tags=["traceability"])

router.include_router(farms_router)
router.include_router(lots_router)
router.include_router(activities_router)
router.include_router(documents_router)
