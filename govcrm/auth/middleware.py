"""Bearer token authentication and request rate limiting dependencies."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from govcrm.auth.tokens import verify_token
from govcrm.config import Settings
from govcrm.database import get_db
from govcrm.errors import Forbidden, RateLimited, Unauthorized
from govcrm.storage.ratelimit import check_rate_limit

logger = logging.getLogger(__name__)

API_KEY_HEADER = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Verified caller identity attached to each authenticated request."""

    user_id: int
    tenant_id: int
    email: str
    role: str


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def get_identity(
    settings: SettingsDep,
    auth_header: str | None = Depends(API_KEY_HEADER),
) -> Identity:
    """Extract and verify the caller from the Bearer token."""
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized()
    token = auth_header[7:].strip()
    if not token:
        raise Unauthorized()
    payload = verify_token(token, settings.jwt_secret)
    try:
        return Identity(
            user_id=int(payload["userId"]),
            tenant_id=int(payload["tenantId"]),
            email=str(payload["email"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise Unauthorized("Invalid token") from e


# Type alias for dependency injection
IdentityDep = Annotated[Identity, Depends(get_identity)]


def require_role(*roles: str):
    """Dependency factory allowing only callers holding one of the roles."""

    async def _check(identity: IdentityDep) -> Identity:
        if identity.role not in roles:
            raise Forbidden("Insufficient permissions")
        return identity

    return _check


async def enforce_rate_limit(
    identifier: str,
    endpoint: str,
    limit: int,
    settings: Settings,
    db: AsyncSession,
) -> None:
    allowed = await check_rate_limit(
        db,
        identifier,
        endpoint,
        limit,
        window_seconds=settings.rate_limit_window_seconds,
    )
    if not allowed:
        logger.warning("Rate limit hit for %s on %s", identifier, endpoint)
        raise RateLimited()


async def api_rate_limit(
    request: Request,
    settings: SettingsDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """General API traffic limit keyed by client IP and path."""
    await enforce_rate_limit(
        client_ip(request), request.url.path, settings.api_rate_limit, settings, db
    )
