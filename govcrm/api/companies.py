"""Company endpoints."""

from fastapi import APIRouter, status

from govcrm.models import Company
from govcrm.schemas.crm import CompanyCreate, CompanyRead
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("", response_model=list[CompanyRead])
async def list_companies(scope: ScopeDep):
    return await scope.all(scope.select(Company).order_by(Company.name, Company.id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyRead)
async def create_company(body: CompanyCreate, scope: ScopeDep):
    company = Company(**body.model_dump(), created_by=scope.identity.user_id)
    async with scope.atomic():
        await scope.add(company)
        await scope.log("create", "company", company.id, f"Created: {company.name}")
    return company
