"""Dashboard schemas."""

from govcrm.schemas.common import CamelModel


class KPIs(CamelModel):
    total_revenue: float
    open_opportunities: int
    win_rate: float
    pipeline_value: float


class StageSummary(CamelModel):
    stage: str
    count: int
    value: float
