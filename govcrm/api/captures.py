"""Capture endpoints."""

from fastapi import APIRouter, status
from sqlalchemy import and_, select

from govcrm.api.opportunities import full_name
from govcrm.models import Capture, Opportunity, User
from govcrm.schemas.crm import CaptureCreate, CaptureListItem, CaptureRead
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("", response_model=list[CaptureListItem])
async def list_captures(scope: ScopeDep):
    """Tenant's captures, newest first, with the capture manager's name."""
    stmt = (
        select(Capture, User.first_name, User.last_name)
        .outerjoin(
            User,
            and_(Capture.capture_manager_id == User.id, User.tenant_id == Capture.tenant_id),
        )
        .order_by(Capture.created_at.desc(), Capture.id.desc())
    )
    result = await scope.db.execute(scope.filter(stmt, Capture))
    return [
        CaptureListItem(
            **CaptureRead.model_validate(capture).model_dump(),
            capture_manager_name=full_name(first, last),
        )
        for capture, first, last in result.all()
    ]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CaptureRead)
async def create_capture(body: CaptureCreate, scope: ScopeDep):
    """Start a capture managed by the caller."""
    await scope.ensure_reference(Opportunity, body.opportunity_id, "Opportunity")
    capture = Capture(**body.model_dump(), capture_manager_id=scope.identity.user_id)
    async with scope.atomic():
        await scope.add(capture)
        await scope.log("create", "capture", capture.id, f"Created: {capture.name}")
    return capture
