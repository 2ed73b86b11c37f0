"""
Repository interfaces used by the lot lifecycle core.

The core only talks to these capabilities, so the SQLAlchemy store can be
swapped for the in-memory one (tests, scripts) without touching it.
Create/update methods take plain dicts of snake_case model fields.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from avotrace.models.traceability import Farm, Lot, LotActivity


class FarmRepository(ABC):
    @abstractmethod
    def get_farm(self, farm_id: int) -> Optional[Farm]:
        ...

    @abstractmethod
    def get_farm_by_code(self, code: str) -> Optional[Farm]:
        """Case-insensitive lookup"""

    @abstractmethod
    def get_all_farms(self) -> List[Farm]:
        ...

    @abstractmethod
    def create_farm(self, data: Dict[str, Any]) -> Farm:
        ...

    @abstractmethod
    def update_farm(self, farm_id: int, patch: Dict[str, Any]) -> Optional[Farm]:
        ...

    @abstractmethod
    def delete_farm(self, farm_id: int) -> bool:
        ...


class LotRepository(ABC):
    @abstractmethod
    def get_lot(self, lot_id: int) -> Optional[Lot]:
        ...

    @abstractmethod
    def get_lot_by_number(self, lot_number: str) -> Optional[Lot]:
        ...

    @abstractmethod
    def create_lot(self, data: Dict[str, Any]) -> Lot:
        """Insert a lot; raises ConflictError when the lot number is taken"""

    @abstractmethod
    def update_lot(self, lot_id: int, patch: Dict[str, Any]) -> Optional[Lot]:
        ...

    @abstractmethod
    def get_all_lots(self) -> List[Lot]:
        ...

    @abstractmethod
    def list_lots(
        self,
        farm_id: Optional[int] = None,
        status: Optional[str] = None,
        harvested_from: Optional[datetime] = None,
        harvested_to: Optional[datetime] = None,
    ) -> List[Lot]:
        """Filtered lots, newest first"""

    @abstractmethod
    def count_lots_with_number_prefix(self, prefix: str) -> int:
        """Number of lots (any farm) whose lot number contains ``prefix``"""

    @abstractmethod
    def count_lots_for_farm(self, farm_id: int) -> int:
        ...


class ActivityRepository(ABC):
    @abstractmethod
    def create_lot_activity(self, data: Dict[str, Any]) -> LotActivity:
        ...

    @abstractmethod
    def get_lot_activity(self, activity_id: int) -> Optional[LotActivity]:
        ...

    @abstractmethod
    def get_lot_activities_by_lot(self, lot_id: int) -> List[LotActivity]:
        """Activities of a lot sorted by date performed (insertion order on ties)"""


class TraceabilityRepository(FarmRepository, LotRepository, ActivityRepository):
    """All three capabilities sharing one unit of work"""

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...
