from avotrace.schemas.common import CamelModel


class StatsResponse(CamelModel):
    total_lots: int
    active_farms: int
    in_transit: int
    delivered_today: int
