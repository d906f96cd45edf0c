"""Contact endpoints."""

from fastapi import APIRouter, status
from sqlalchemy import and_, select

from govcrm.models import Company, Contact
from govcrm.schemas.crm import ContactCreate, ContactListItem, ContactRead
from govcrm.storage.scope import ScopeDep

router = APIRouter()


@router.get("", response_model=list[ContactListItem])
async def list_contacts(scope: ScopeDep):
    """Tenant's contacts ordered by last then first name."""
    stmt = (
        select(Contact, Company.name)
        .outerjoin(
            Company,
            and_(Contact.company_id == Company.id, Company.tenant_id == Contact.tenant_id),
        )
        .order_by(Contact.last_name, Contact.first_name, Contact.id)
    )
    result = await scope.db.execute(scope.filter(stmt, Contact))
    return [
        ContactListItem(
            **ContactRead.model_validate(contact).model_dump(), company_name=company_name
        )
        for contact, company_name in result.all()
    ]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ContactRead)
async def create_contact(body: ContactCreate, scope: ScopeDep):
    await scope.ensure_reference(Company, body.company_id, "Company")
    contact = Contact(**body.model_dump(), created_by=scope.identity.user_id)
    async with scope.atomic():
        await scope.add(contact)
        await scope.log(
            "create",
            "contact",
            contact.id,
            f"Created: {contact.first_name} {contact.last_name}",
        )
    return contact
