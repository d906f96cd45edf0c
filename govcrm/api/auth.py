"""Auth endpoints - register, login, current user."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from govcrm.auth.middleware import SettingsDep, client_ip, enforce_rate_limit
from govcrm.auth.passwords import dummy_hash, hash_password, verify_password
from govcrm.auth.tokens import issue_token
from govcrm.database import get_db
from govcrm.errors import Unauthorized, ValidationError
from govcrm.models import ActivityLogEntry, User
from govcrm.models.base import utcnow
from govcrm.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from govcrm.storage.repositories import (
    create_tenant,
    create_user,
    get_active_user,
    get_tenant,
    get_tenant_by_key,
)
from govcrm.storage.scope import ScopeDep
from govcrm.utils.slug import tenant_key_for

logger = logging.getLogger(__name__)

# Unauthenticated routes
public_router = APIRouter()
# Routes behind the bearer token gate
router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"
DUPLICATE_COMPANY = "Company name already registered"


@public_router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    body: RegisterRequest,
    request: Request,
    settings: SettingsDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a tenant and its first (admin) user."""
    await enforce_rate_limit(
        body.email, request.url.path, settings.register_rate_limit, settings, db
    )

    tenant_key = tenant_key_for(body.company_name)
    if await get_tenant_by_key(db, tenant_key):
        raise ValidationError(DUPLICATE_COMPANY)

    password_hash = await run_in_threadpool(
        hash_password, body.password, settings.bcrypt_rounds
    )
    try:
        tenant = await create_tenant(db, tenant_key, body.company_name, body.email)
        await create_user(
            db,
            tenant_id=tenant.id,
            email=body.email,
            password_hash=password_hash,
            first_name=body.first_name,
            last_name=body.last_name,
            role="admin",
        )
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same company
        await db.rollback()
        raise ValidationError(DUPLICATE_COMPANY) from e

    logger.info("Registered tenant %s (id=%s)", tenant_key, tenant.id)
    return RegisterResponse(tenant_key=tenant_key, tenant_id=tenant.id)


@public_router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    settings: SettingsDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Exchange tenant key, email and password for a bearer token.
    Every failure returns the same 401 so callers cannot probe for
    tenants or users.
    """
    await enforce_rate_limit(
        body.email, request.url.path, settings.login_rate_limit, settings, db
    )

    tenant = await get_tenant_by_key(db, body.tenant_key)
    user = None
    if tenant is not None and tenant.is_active:
        user = await get_active_user(db, tenant.id, body.email)

    if user is not None:
        stored_hash = user.password_hash
    else:
        stored_hash = await run_in_threadpool(dummy_hash, settings.bcrypt_rounds)
    valid = await run_in_threadpool(verify_password, body.password, stored_hash)
    if user is None or not valid:
        logger.info("Failed login for tenant %s", body.tenant_key)
        raise Unauthorized(INVALID_CREDENTIALS)

    user.last_login = utcnow()
    db.add(
        ActivityLogEntry(
            tenant_id=tenant.id,
            user_id=user.id,
            activity_type="login",
            description="User logged in",
            ip_address=client_ip(request),
        )
    )
    await db.commit()

    token = issue_token(
        {
            "userId": user.id,
            "tenantId": tenant.id,
            "email": user.email,
            "role": user.role,
        },
        settings.jwt_secret,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )
    logger.info("User %s logged in to tenant %s", user.id, tenant.tenant_key)
    return LoginResponse(
        token=token,
        user=UserSummary(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            tenant_key=tenant.tenant_key,
        ),
    )


@router.get("/me", response_model=UserSummary)
async def me(scope: ScopeDep):
    """The authenticated caller."""
    user = await scope.get(User, scope.identity.user_id, "User")
    tenant = await get_tenant(scope.db, scope.tenant_id)
    return UserSummary(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        tenant_key=tenant.tenant_key,
    )
