"""Opportunity endpoints."""

from fastapi import APIRouter, Query, status
from sqlalchemy import and_, select
from sqlalchemy.orm import aliased

from govcrm.engine.pipeline import expected_revenue
from govcrm.errors import ValidationError
from govcrm.models import Company, Opportunity, User
from govcrm.models.base import utcnow
from govcrm.schemas.crm import (
    OpportunityCreate,
    OpportunityListItem,
    OpportunityRead,
    OpportunityUpdate,
    Stage,
)
from govcrm.storage.scope import ScopeDep

router = APIRouter()

# Columns that exist as NOT NULL and may not be cleared by an update
_REQUIRED_FIELDS = ("name", "stage", "probability")


def full_name(first: str | None, last: str | None) -> str | None:
    name = " ".join(p for p in (first, last) if p)
    return name or None


@router.get("", response_model=list[OpportunityListItem])
async def list_opportunities(
    scope: ScopeDep,
    stage: Stage | None = None,
    owner_id: int | None = Query(default=None, alias="ownerId"),
):
    """Tenant's opportunities, newest first, optionally filtered by stage or owner."""
    owner = aliased(User)
    stmt = (
        select(Opportunity, Company.name, owner.first_name, owner.last_name)
        .outerjoin(
            Company,
            and_(
                Opportunity.company_id == Company.id,
                Company.tenant_id == Opportunity.tenant_id,
            ),
        )
        .outerjoin(
            owner,
            and_(Opportunity.owner_id == owner.id, owner.tenant_id == Opportunity.tenant_id),
        )
        .order_by(Opportunity.created_at.desc(), Opportunity.id.desc())
    )
    stmt = scope.filter(stmt, Opportunity)
    if stage:
        stmt = stmt.where(Opportunity.stage == stage)
    if owner_id is not None:
        stmt = stmt.where(Opportunity.owner_id == owner_id)

    result = await scope.db.execute(stmt)
    return [
        OpportunityListItem(
            **OpportunityRead.model_validate(opp).model_dump(),
            company_name=company_name,
            owner_name=full_name(first, last),
        )
        for opp, company_name, first, last in result.all()
    ]


@router.get("/{opportunity_id}", response_model=OpportunityRead)
async def get_opportunity(opportunity_id: int, scope: ScopeDep):
    return await scope.get(Opportunity, opportunity_id, "Opportunity")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OpportunityRead)
async def create_opportunity(body: OpportunityCreate, scope: ScopeDep):
    """Create an opportunity owned by the caller."""
    await scope.ensure_reference(Company, body.company_id, "Company")
    opp = Opportunity(
        **body.model_dump(),
        expected_revenue=expected_revenue(body.amount, body.probability),
        owner_id=scope.identity.user_id,
    )
    async with scope.atomic():
        await scope.add(opp)
        await scope.log("create", "opportunity", opp.id, f"Created: {opp.name}")
    return opp


@router.put("/{opportunity_id}", response_model=OpportunityRead)
async def update_opportunity(
    opportunity_id: int, body: OpportunityUpdate, scope: ScopeDep
):
    """Apply the supplied fields; expected revenue follows amount and probability."""
    opp = await scope.get(Opportunity, opportunity_id, "Opportunity")
    changes = body.model_dump(exclude_unset=True)

    for field in _REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")
    if "company_id" in changes:
        await scope.ensure_reference(Company, changes["company_id"], "Company")

    for field, value in changes.items():
        setattr(opp, field, value)
    if "amount" in changes or "probability" in changes:
        opp.expected_revenue = expected_revenue(opp.amount, opp.probability)
    opp.updated_at = utcnow()

    async with scope.atomic():
        await scope.db.flush()
        await scope.log("update", "opportunity", opp.id, f"Updated: {opp.name}")
    return opp
