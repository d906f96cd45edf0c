"""Activity log endpoint."""

from fastapi import APIRouter, Query

from govcrm.models import ActivityLogEntry
from govcrm.schemas.crm import ActivityRead
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("", response_model=list[ActivityRead])
async def list_activity(scope: ScopeDep, limit: int = Query(default=50, ge=1, le=200)):
    """Most recent activity in the tenant."""
    stmt = (
        scope.select(ActivityLogEntry)
        .order_by(ActivityLogEntry.created_at.desc(), ActivityLogEntry.id.desc())
        .limit(limit)
    )
    return await scope.all(stmt)
