"""Dashboard aggregates over the tenant's opportunity pipeline."""

from fastapi import APIRouter
from sqlalchemy import case, func, select

from govcrm.engine.pipeline import stage_order, win_rate
from govcrm.models import Opportunity
from govcrm.models.crm import CLOSED_STAGES
from govcrm.schemas.dashboard import KPIs, StageSummary
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("/kpis", response_model=KPIs)
async def kpis(scope: ScopeDep):
    """Won revenue, open count, win rate and weighted pipeline value."""
    is_open = Opportunity.stage.notin_(CLOSED_STAGES)
    stmt = scope.filter(
        select(
            func.coalesce(
                func.sum(case((Opportunity.stage == "closed_won", Opportunity.amount))), 0
            ),
            func.count(case((is_open, 1))),
            func.count(case((Opportunity.stage == "closed_won", 1))),
            func.count(case((Opportunity.stage.in_(CLOSED_STAGES), 1))),
            func.coalesce(func.sum(case((is_open, Opportunity.expected_revenue))), 0),
        ),
        Opportunity,
    )
    revenue, open_count, won, closed, pipeline = (await scope.db.execute(stmt)).one()
    return KPIs(
        total_revenue=float(revenue or 0),
        open_opportunities=int(open_count or 0),
        win_rate=win_rate(int(won or 0), int(closed or 0)),
        pipeline_value=float(pipeline or 0),
    )


@router.get("/pipeline-by-stage", response_model=list[StageSummary])
async def pipeline_by_stage(scope: ScopeDep):
    """Count and total amount for each open stage."""
    stmt = scope.filter(
        select(
            Opportunity.stage,
            func.count(Opportunity.id),
            func.coalesce(func.sum(Opportunity.amount), 0),
        )
        .where(Opportunity.stage.notin_(CLOSED_STAGES))
        .group_by(Opportunity.stage),
        Opportunity,
    )
    rows = (await scope.db.execute(stmt)).all()
    return [
        StageSummary(stage=stage, count=count, value=float(value))
        for stage, count, value in sorted(rows, key=lambda r: stage_order(r[0]))
    ]
