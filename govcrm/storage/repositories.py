"""Repository functions for tenants and users (pre-authentication lookups)."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from govcrm.models import Tenant, User


async def get_tenant_by_key(db: AsyncSession, tenant_key: str) -> Tenant | None:
    """Find tenant by its unique key."""
    result = await db.execute(select(Tenant).where(Tenant.tenant_key == tenant_key))
    return result.scalar_one_or_none()


async def get_tenant(db: AsyncSession, tenant_id: int) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return result.scalar_one_or_none()


async def get_active_user(db: AsyncSession, tenant_id: int, email: str) -> User | None:
    """Find an active user by email within a tenant."""
    result = await db.execute(
        select(User).where(
            User.tenant_id == tenant_id,
            User.email == email,
            User.is_active.is_(True),
        )
    )
    return result.scalar_one_or_none()


async def email_taken(db: AsyncSession, tenant_id: int, email: str) -> bool:
    result = await db.execute(
        select(User.id).where(User.tenant_id == tenant_id, User.email == email)
    )
    return result.scalar_one_or_none() is not None


async def count_active_users(db: AsyncSession, tenant_id: int) -> int:
    result = await db.execute(
        select(func.count(User.id)).where(
            User.tenant_id == tenant_id, User.is_active.is_(True)
        )
    )
    return int(result.scalar_one())


async def create_tenant(
    db: AsyncSession, tenant_key: str, company_name: str, contact_email: str
) -> Tenant:
    tenant = Tenant(
        tenant_key=tenant_key,
        company_name=company_name,
        contact_email=contact_email,
    )
    db.add(tenant)
    await db.flush()
    return tenant


async def create_user(
    db: AsyncSession,
    tenant_id: int,
    email: str,
    password_hash: str,
    first_name: str | None,
    last_name: str | None,
    role: str = "user",
) -> User:
    user = User(
        tenant_id=tenant_id,
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.add(user)
    await db.flush()
    return user
