"""
Lot lifecycle: lot creation and the activity-driven status machine.

A lot's status is always the status mapped from its most recently recorded
activity. There is no transition guard: any activity may follow any other,
including going back to ``harvested`` after delivery.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from avotrace.core.config import settings
from avotrace.core.exceptions import ConflictError, NotFoundError, ValidationError
from avotrace.models.traceability import ActivityType, Lot, LotActivity, LotStatus
from avotrace.repositories.base import TraceabilityRepository
from avotrace.services.lot_numbers import LOT_NUMBER_PATTERN, LotNumberGenerator
from avotrace.utils.datetime_utils import to_utc_naive

logger = logging.getLogger(__name__)

STATUS_BY_ACTIVITY = {
    ActivityType.HARVEST: LotStatus.HARVESTED,
    ActivityType.PACKAGE: LotStatus.PACKAGED,
    ActivityType.COOL: LotStatus.COOLED,
    ActivityType.SHIP: LotStatus.SHIPPED,
    ActivityType.DELIVER: LotStatus.DELIVERED,
}

ACTIVITY_BY_STATUS = {status: activity for activity, status in STATUS_BY_ACTIVITY.items()}

INITIAL_ACTIVITY_NOTES = "Création initiale du lot"

# Fields a client may change on an existing lot; the status only moves through activities
UPDATABLE_LOT_FIELDS = ("harvest_date", "initial_quantity", "notes")
REQUIRED_LOT_FIELDS = ("harvest_date", "initial_quantity")


def _coerce_activity_type(value: Union[str, ActivityType]) -> ActivityType:
    try:
        return ActivityType(value)
    except ValueError:
        allowed = ", ".join(a.value for a in ActivityType)
        raise ValidationError.for_field("activity_type", f"Unknown activity type '{value}' (expected one of {allowed})")


def status_for_activity(activity_type: Union[str, ActivityType]) -> LotStatus:
    return STATUS_BY_ACTIVITY[_coerce_activity_type(activity_type)]


def _check_operator(operator_name: Optional[str]) -> None:
    if not operator_name or not operator_name.strip():
        raise ValidationError.for_field("operator_name", "Operator name is required")


class LotLifecycleService:
    def __init__(
        self,
        repository: TraceabilityRepository,
        numbers: Optional[LotNumberGenerator] = None,
        default_operator: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ):
        self.repository = repository
        self.numbers = numbers or LotNumberGenerator(repository)
        self.default_operator = default_operator or settings.DEFAULT_OPERATOR_NAME
        self.max_attempts = max_attempts or settings.LOT_NUMBER_MAX_ATTEMPTS

    def get_lot(self, lot_id: int) -> Lot:
        lot = self.repository.get_lot(lot_id)
        if not lot:
            raise NotFoundError("Lot", lot_id)
        return lot

    def get_activities(self, lot_id: int) -> List[LotActivity]:
        self.get_lot(lot_id)
        return self.repository.get_lot_activities_by_lot(lot_id)

    def create_lot(self, data: Dict[str, Any], operator_name: Optional[str] = None) -> Lot:
        """
        Create a lot and its initial activity in one commit.

        ``data`` holds the LotCreate fields. When ``lot_number`` is missing one
        is generated from the harvest date; a clash on insert regenerates it,
        up to ``max_attempts`` tries. An explicit lot number that clashes is
        reported as a conflict straight away. Any failure rolls back both rows.
        """
        values = dict(data)
        farm_id = values["farm_id"]
        if not self.repository.get_farm(farm_id):
            raise NotFoundError("Farm", farm_id)

        values["harvest_date"] = to_utc_naive(values["harvest_date"])
        initial_status = LotStatus(values.pop("current_status", None) or LotStatus.HARVESTED)
        values["current_status"] = initial_status.value
        if values.get("initial_quantity") is None or values["initial_quantity"] <= 0:
            raise ValidationError.for_field("initial_quantity", "Initial quantity must be greater than 0")
        operator_name = operator_name or self.default_operator
        _check_operator(operator_name)

        generated = not values.get("lot_number")
        if not generated and not LOT_NUMBER_PATTERN.match(values["lot_number"]):
            raise ValidationError.for_field(
                "lot_number", f"Lot number {values['lot_number']} does not match PREFIX-YYMMDD-NNN"
            )

        try:
            lot = self._insert_lot(values, generated)
            self._append_activity(
                lot,
                activity_type=ACTIVITY_BY_STATUS[initial_status],
                date_performed=lot.harvest_date,
                quantity=lot.initial_quantity,
                operator_name=operator_name,
                notes=INITIAL_ACTIVITY_NOTES,
            )
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        logger.info(f"Created lot {lot.lot_number} for farm {farm_id} ({lot.initial_quantity} kg)")
        return lot

    def _insert_lot(self, values: Dict[str, Any], generated: bool) -> Lot:
        attempt = 0
        while True:
            attempt += 1
            if generated:
                values["lot_number"] = self.numbers.generate(values["farm_id"], values["harvest_date"])
            try:
                return self.repository.create_lot(values)
            except ConflictError:
                if not generated or attempt >= self.max_attempts:
                    raise
                logger.warning(
                    f"Lot number {values['lot_number']} collided on insert "
                    f"(attempt {attempt}/{self.max_attempts}), regenerating"
                )

    def update_lot(self, lot_id: int, patch: Dict[str, Any]) -> Lot:
        changes = {k: v for k, v in patch.items() if k in UPDATABLE_LOT_FIELDS}
        for field in REQUIRED_LOT_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError.for_field(field, f"{field} cannot be null")
        if "initial_quantity" in changes and changes["initial_quantity"] <= 0:
            raise ValidationError.for_field("initial_quantity", "Initial quantity must be greater than 0")
        if "harvest_date" in changes:
            changes["harvest_date"] = to_utc_naive(changes["harvest_date"])

        try:
            lot = self.repository.update_lot(lot_id, changes)
            if not lot:
                raise NotFoundError("Lot", lot_id)
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        return lot

    def record_activity(
        self,
        lot_id: int,
        activity_type: Union[str, ActivityType],
        date_performed: datetime,
        quantity: int,
        operator_name: str,
        notes: Optional[str] = None,
        attachments: Iterable[str] = (),
    ) -> LotActivity:
        """Append an activity to a lot and move the lot to the matching status"""
        lot = self.get_lot(lot_id)
        activity_type = _coerce_activity_type(activity_type)
        try:
            activity = self._append_activity(
                lot,
                activity_type=activity_type,
                date_performed=date_performed,
                quantity=quantity,
                operator_name=operator_name,
                notes=notes,
                attachments=attachments,
            )
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        logger.info(f"Lot {lot.lot_number}: recorded {activity.activity_type}, status is now {lot.current_status}")
        return activity

    def _append_activity(
        self,
        lot: Lot,
        activity_type: ActivityType,
        date_performed: datetime,
        quantity: int,
        operator_name: str,
        notes: Optional[str] = None,
        attachments: Iterable[str] = (),
    ) -> LotActivity:
        if quantity is None or quantity <= 0:
            raise ValidationError.for_field("quantity", "Quantity must be greater than 0")
        _check_operator(operator_name)

        activity = self.repository.create_lot_activity(
            {
                "lot_id": lot.id,
                "activity_type": activity_type.value,
                "date_performed": to_utc_naive(date_performed),
                "quantity": quantity,
                "operator_name": operator_name,
                "notes": notes,
                "attachments": list(attachments),
            }
        )
        self.repository.update_lot(lot.id, {"current_status": STATUS_BY_ACTIVITY[activity_type].value})
        return activity
