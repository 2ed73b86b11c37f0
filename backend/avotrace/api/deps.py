"""
Shared FastAPI dependencies
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from avotrace.core.database import get_db
from avotrace.repositories import SqlTraceabilityRepository, TraceabilityRepository
from avotrace.services.lot_lifecycle import LotLifecycleService


def get_repository(db: Session = Depends(get_db)) -> TraceabilityRepository:
    return SqlTraceabilityRepository(db)


def get_lifecycle_service(
    repository: TraceabilityRepository = Depends(get_repository),
) -> LotLifecycleService:
    return LotLifecycleService(repository)
