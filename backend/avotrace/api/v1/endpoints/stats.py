"""
Dashboard statistics endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from avotrace.core.database import get_db
from avotrace.schemas.stats import StatsResponse
from avotrace.services.stats_service import get_stats

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
async def get_dashboard_stats(db: Session = Depends(get_db)):
    return get_stats(db)
