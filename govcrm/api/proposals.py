"""Proposal package endpoints."""

from fastapi import APIRouter, Query, status

from govcrm.errors import ValidationError
from govcrm.models import Capture, Opportunity, ProposalPackage
from govcrm.models.base import utcnow
from govcrm.schemas.crm import ProposalCreate, ProposalRead, ProposalStatus, ProposalUpdate
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("", response_model=list[ProposalRead])
async def list_proposals(
    scope: ScopeDep,
    status_filter: ProposalStatus | None = Query(default=None, alias="status"),
):
    """Proposals by due date, undated ones last."""
    stmt = scope.select(ProposalPackage).order_by(
        ProposalPackage.due_date.is_(None),
        ProposalPackage.due_date,
        ProposalPackage.id,
    )
    if status_filter:
        stmt = stmt.where(ProposalPackage.status == status_filter)
    return await scope.all(stmt)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProposalRead)
async def create_proposal(body: ProposalCreate, scope: ScopeDep):
    await scope.ensure_reference(Opportunity, body.opportunity_id, "Opportunity")
    await scope.ensure_reference(Capture, body.capture_id, "Capture")
    proposal = ProposalPackage(**body.model_dump(), created_by=scope.identity.user_id)
    async with scope.atomic():
        await scope.add(proposal)
        await scope.log("create", "proposal", proposal.id, f"Created: {proposal.title}")
    return proposal


@router.put("/{proposal_id}", response_model=ProposalRead)
async def update_proposal(proposal_id: int, body: ProposalUpdate, scope: ScopeDep):
    proposal = await scope.get(ProposalPackage, proposal_id, "Proposal")
    changes = body.model_dump(exclude_unset=True)
    for field in ("title", "status", "completion_percentage"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")

    for field, value in changes.items():
        setattr(proposal, field, value)
    proposal.updated_at = utcnow()

    async with scope.atomic():
        await scope.db.flush()
        await scope.log("update", "proposal", proposal.id, f"Updated: {proposal.title}")
    return proposal
