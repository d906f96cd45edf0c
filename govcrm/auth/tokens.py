"""Signed bearer tokens (HS256 JWT) carrying user, tenant and role."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from govcrm.errors import InvalidSignature, TokenExpired

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)
REQUIRED_CLAIMS = ("userId", "tenantId", "email", "role")


def issue_token(
    payload: dict[str, Any],
    secret: str,
    now: datetime | None = None,
    ttl: timedelta = DEFAULT_TTL,
) -> str:
    """
    Sign a token for the given identity payload.
    Adds iat/exp claims; the same payload, timestamp and secret always
    produce the same token.
    """
    missing = [c for c in REQUIRED_CLAIMS if c not in payload]
    if missing:
        raise ValueError(f"Token payload missing claims: {', '.join(missing)}")
    issued = now or datetime.now(timezone.utc)
    iat = int(issued.timestamp())
    claims = {**payload, "iat": iat, "exp": iat + int(ttl.total_seconds())}
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the decoded claims.
    Raises TokenExpired for a valid but expired token and InvalidSignature
    for anything else that fails to verify.
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired() from e
    except jwt.InvalidTokenError as e:
        raise InvalidSignature() from e
