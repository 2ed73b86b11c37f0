"""
SQLAlchemy implementation of the traceability repositories
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from avotrace.core.exceptions import ConflictError
from avotrace.models.traceability import Farm, Lot, LotActivity
from avotrace.repositories.base import TraceabilityRepository

logger = logging.getLogger(__name__)


class SqlTraceabilityRepository(TraceabilityRepository):
    def __init__(self, db: Session):
        self.db = db

    # Unit of work

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def _flush_or_conflict(self, message: str) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"{message}: {exc.orig}")
            raise ConflictError(message) from exc

    # Farms

    def get_farm(self, farm_id: int) -> Optional[Farm]:
        return self.db.query(Farm).filter(Farm.id == farm_id).first()

    def get_farm_by_code(self, code: str) -> Optional[Farm]:
        return self.db.query(Farm).filter(func.lower(Farm.code) == code.lower()).first()

    def get_all_farms(self) -> List[Farm]:
        return self.db.query(Farm).order_by(Farm.id).all()

    def create_farm(self, data: Dict[str, Any]) -> Farm:
        farm = Farm(**data)
        self.db.add(farm)
        self._flush_or_conflict(f"Farm code {data.get('code')} already in use")
        return farm

    def update_farm(self, farm_id: int, patch: Dict[str, Any]) -> Optional[Farm]:
        farm = self.get_farm(farm_id)
        if not farm:
            return None
        for field, value in patch.items():
            setattr(farm, field, value)
        if "code" in patch:
            self._flush_or_conflict(f"Farm code {patch['code']} already in use")
        else:
            self.db.flush()
        return farm

    def delete_farm(self, farm_id: int) -> bool:
        farm = self.get_farm(farm_id)
        if not farm:
            return False
        self.db.delete(farm)
        self.db.flush()
        return True

    # Lots

    def get_lot(self, lot_id: int) -> Optional[Lot]:
        return self.db.query(Lot).filter(Lot.id == lot_id).first()

    def get_lot_by_number(self, lot_number: str) -> Optional[Lot]:
        return self.db.query(Lot).filter(Lot.lot_number == lot_number).first()

    def create_lot(self, data: Dict[str, Any]) -> Lot:
        lot = Lot(**data)
        self.db.add(lot)
        self._flush_or_conflict(f"Lot number {data.get('lot_number')} already exists")
        return lot

    def update_lot(self, lot_id: int, patch: Dict[str, Any]) -> Optional[Lot]:
        lot = self.get_lot(lot_id)
        if not lot:
            return None
        for field, value in patch.items():
            setattr(lot, field, value)
        self.db.flush()
        return lot

    def get_all_lots(self) -> List[Lot]:
        return self.db.query(Lot).order_by(Lot.id).all()

    def list_lots(
        self,
        farm_id: Optional[int] = None,
        status: Optional[str] = None,
        harvested_from: Optional[datetime] = None,
        harvested_to: Optional[datetime] = None,
    ) -> List[Lot]:
        query = self.db.query(Lot)
        if farm_id is not None:
            query = query.filter(Lot.farm_id == farm_id)
        if status:
            query = query.filter(Lot.current_status == status)
        if harvested_from is not None and harvested_to is not None:
            query = query.filter(Lot.harvest_date >= harvested_from, Lot.harvest_date <= harvested_to)
        return query.order_by(Lot.created_at.desc(), Lot.id.desc()).all()

    def count_lots_with_number_prefix(self, prefix: str) -> int:
        return (
            self.db.query(func.count(Lot.id))
            .filter(Lot.lot_number.contains(prefix, autoescape=True))
            .scalar()
            or 0
        )

    def count_lots_for_farm(self, farm_id: int) -> int:
        return self.db.query(func.count(Lot.id)).filter(Lot.farm_id == farm_id).scalar() or 0

    # Activities

    def create_lot_activity(self, data: Dict[str, Any]) -> LotActivity:
        activity = LotActivity(**data)
        self.db.add(activity)
        self.db.flush()
        return activity

    def get_lot_activity(self, activity_id: int) -> Optional[LotActivity]:
        return self.db.query(LotActivity).filter(LotActivity.id == activity_id).first()

    def get_lot_activities_by_lot(self, lot_id: int) -> List[LotActivity]:
        return (
            self.db.query(LotActivity)
            .filter(LotActivity.lot_id == lot_id)
            .order_by(LotActivity.date_performed.asc(), LotActivity.id.asc())
            .all()
        )
