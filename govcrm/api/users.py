"""Tenant user management."""

import logging

from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from govcrm.auth.middleware import SettingsDep, require_role
from govcrm.auth.passwords import hash_password
from govcrm.errors import ValidationError
from govcrm.models import User
from govcrm.schemas.auth import InviteUserRequest, UserRead
from govcrm.storage.repositories import count_active_users, email_taken, get_tenant
from govcrm.storage.scope import ScopeDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[UserRead])
async def list_users(scope: ScopeDep):
    return await scope.all(
        scope.select(User).order_by(User.last_name, User.first_name, User.id)
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserRead,
    dependencies=[Depends(require_role("admin"))],
)
async def invite_user(body: InviteUserRequest, scope: ScopeDep, settings: SettingsDep):
    """Add a user to the caller's tenant, within the tenant's seat limit."""
    if await email_taken(scope.db, scope.tenant_id, body.email):
        raise ValidationError("Email already registered")
    tenant = await get_tenant(scope.db, scope.tenant_id)
    if await count_active_users(scope.db, scope.tenant_id) >= tenant.max_users:
        raise ValidationError("User limit reached", details={"maxUsers": tenant.max_users})

    password_hash = await run_in_threadpool(
        hash_password, body.password, settings.bcrypt_rounds
    )
    user = User(
        email=body.email,
        password_hash=password_hash,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
    )
    async with scope.atomic():
        await scope.add(user)
        await scope.log("create", "user", user.id, f"Invited: {user.email} as {user.role}")
    logger.info("Tenant %s added user %s", scope.tenant_id, user.id)
    return user
