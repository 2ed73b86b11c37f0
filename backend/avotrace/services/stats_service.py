"""
Dashboard counters
"""
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from avotrace.models.traceability import ActivityType, Farm, Lot, LotActivity, LotStatus
from avotrace.schemas.stats import StatsResponse
from avotrace.utils.datetime_utils import utc_day_start


def get_stats(db: Session) -> StatsResponse:
    total_lots = db.query(func.count(Lot.id)).scalar() or 0
    active_farms = db.query(func.count(Farm.id)).filter(Farm.active.is_(True)).scalar() or 0
    in_transit = (
        db.query(func.count(Lot.id)).filter(Lot.current_status == LotStatus.SHIPPED.value).scalar() or 0
    )
    # Delivered lots whose deliver activity was recorded since UTC midnight
    delivered_since_midnight = select(LotActivity.lot_id).where(
        LotActivity.activity_type == ActivityType.DELIVER.value,
        LotActivity.created_at >= utc_day_start(),
    )
    delivered_today = (
        db.query(func.count(Lot.id))
        .filter(
            Lot.current_status == LotStatus.DELIVERED.value,
            Lot.id.in_(delivered_since_midnight),
        )
        .scalar()
        or 0
    )
    return StatsResponse(
        total_lots=total_lots,
        active_farms=active_farms,
        in_transit=in_transit,
        delivered_today=delivered_today,
    )
