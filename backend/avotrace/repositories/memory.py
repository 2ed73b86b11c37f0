"""
Dict-backed repository, same contract as the SQL one.
Used by tests and offline scripts; nothing is persisted.

Writes are applied straight away and journaled; ``rollback`` undoes
everything since the last ``commit``. Ids handed out are not reused.
"""
from datetime import datetime
from itertools import count
from typing import Any, Callable, Dict, List, Optional

from avotrace.core.exceptions import ConflictError
from avotrace.models.traceability import Farm, Lot, LotActivity, LotStatus
from avotrace.repositories.base import TraceabilityRepository
from avotrace.utils.datetime_utils import utcnow


class InMemoryTraceabilityRepository(TraceabilityRepository):
    def __init__(self):
        self._farms: Dict[int, Farm] = {}
        self._lots: Dict[int, Lot] = {}
        self._activities: Dict[int, LotActivity] = {}
        self._farm_ids = count(1)
        self._lot_ids = count(1)
        self._activity_ids = count(1)
        self._undo: List[Callable[[], None]] = []

    # Unit of work

    def commit(self) -> None:
        self._undo.clear()

    def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()

    def _track_insert(self, table: Dict[int, Any], key: int) -> None:
        self._undo.append(lambda: table.pop(key, None))

    def _track_update(self, obj: Any, fields) -> None:
        previous = {field: getattr(obj, field) for field in fields}

        def restore():
            for field, value in previous.items():
                setattr(obj, field, value)

        self._undo.append(restore)

    def _apply(self, obj: Any, patch: Dict[str, Any]) -> None:
        self._track_update(obj, list(patch) + ["updated_at"])
        for field, value in patch.items():
            setattr(obj, field, value)
        obj.updated_at = utcnow()

    # Farms

    def get_farm(self, farm_id: int) -> Optional[Farm]:
        return self._farms.get(farm_id)

    def get_farm_by_code(self, code: str) -> Optional[Farm]:
        return next((f for f in self._farms.values() if f.code.lower() == code.lower()), None)

    def get_all_farms(self) -> List[Farm]:
        return list(self._farms.values())

    def create_farm(self, data: Dict[str, Any]) -> Farm:
        if self.get_farm_by_code(data["code"]):
            raise ConflictError(f"Farm code {data['code']} already in use")
        now = utcnow()
        farm = Farm(id=next(self._farm_ids), active=True, created_at=now, updated_at=now)
        for field, value in data.items():
            setattr(farm, field, value)
        self._farms[farm.id] = farm
        self._track_insert(self._farms, farm.id)
        return farm

    def update_farm(self, farm_id: int, patch: Dict[str, Any]) -> Optional[Farm]:
        farm = self._farms.get(farm_id)
        if not farm:
            return None
        code = patch.get("code")
        if code:
            other = self.get_farm_by_code(code)
            if other and other.id != farm_id:
                raise ConflictError(f"Farm code {code} already in use")
        self._apply(farm, patch)
        return farm

    def delete_farm(self, farm_id: int) -> bool:
        farm = self._farms.pop(farm_id, None)
        if farm is None:
            return False
        self._undo.append(lambda: self._farms.__setitem__(farm_id, farm))
        return True

    # Lots

    def get_lot(self, lot_id: int) -> Optional[Lot]:
        return self._lots.get(lot_id)

    def get_lot_by_number(self, lot_number: str) -> Optional[Lot]:
        return next((lot for lot in self._lots.values() if lot.lot_number == lot_number), None)

    def create_lot(self, data: Dict[str, Any]) -> Lot:
        if self.get_lot_by_number(data["lot_number"]):
            raise ConflictError(f"Lot number {data['lot_number']} already exists")
        now = utcnow()
        lot = Lot(
            id=next(self._lot_ids),
            current_status=LotStatus.HARVESTED.value,
            created_at=now,
            updated_at=now,
        )
        for field, value in data.items():
            setattr(lot, field, value)
        self._lots[lot.id] = lot
        self._track_insert(self._lots, lot.id)
        return lot

    def update_lot(self, lot_id: int, patch: Dict[str, Any]) -> Optional[Lot]:
        lot = self._lots.get(lot_id)
        if not lot:
            return None
        self._apply(lot, patch)
        return lot

    def get_all_lots(self) -> List[Lot]:
        return list(self._lots.values())

    def list_lots(
        self,
        farm_id: Optional[int] = None,
        status: Optional[str] = None,
        harvested_from: Optional[datetime] = None,
        harvested_to: Optional[datetime] = None,
    ) -> List[Lot]:
        lots = list(self._lots.values())
        if farm_id is not None:
            lots = [lot for lot in lots if lot.farm_id == farm_id]
        if status:
            lots = [lot for lot in lots if lot.current_status == status]
        if harvested_from is not None and harvested_to is not None:
            lots = [lot for lot in lots if harvested_from <= lot.harvest_date <= harvested_to]
        return sorted(lots, key=lambda lot: (lot.created_at, lot.id), reverse=True)

    def count_lots_with_number_prefix(self, prefix: str) -> int:
        return sum(1 for lot in self._lots.values() if prefix in lot.lot_number)

    def count_lots_for_farm(self, farm_id: int) -> int:
        return sum(1 for lot in self._lots.values() if lot.farm_id == farm_id)

    # Activities

    def create_lot_activity(self, data: Dict[str, Any]) -> LotActivity:
        activity = LotActivity(id=next(self._activity_ids), attachments=[], created_at=utcnow())
        for field, value in data.items():
            setattr(activity, field, value)
        self._activities[activity.id] = activity
        self._track_insert(self._activities, activity.id)
        return activity

    def get_lot_activity(self, activity_id: int) -> Optional[LotActivity]:
        return self._activities.get(activity_id)

    def get_lot_activities_by_lot(self, lot_id: int) -> List[LotActivity]:
        activities = [a for a in self._activities.values() if a.lot_id == lot_id]
        return sorted(activities, key=lambda a: (a.date_performed, a.id))
