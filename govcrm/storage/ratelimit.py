"""Fixed-window request counter stored in the rate_limits table.

Counters are keyed by (identifier, endpoint, window_start) with window_start
truncated to the window size, so counts reset sharply at window boundaries
instead of decaying like a true sliding window. The read and the increment
are separate statements; two concurrent requests in the same window can both
pass the check, which is acceptable for abuse mitigation.
"""

from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from govcrm.models import RateLimitCounter
from govcrm.models.base import utcnow

DEFAULT_WINDOW_SECONDS = 60


def window_start_for(now: datetime, window_seconds: int = DEFAULT_WINDOW_SECONDS) -> datetime:
    """Truncate a timestamp to the start of its window."""
    epoch = datetime(1970, 1, 1)
    elapsed = int((now - epoch).total_seconds())
    return epoch + timedelta(seconds=elapsed - elapsed % window_seconds)


def _upsert(db: AsyncSession):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(RateLimitCounter)
    if dialect == "sqlite":
        return sqlite_insert(RateLimitCounter)
    raise NotImplementedError(f"Rate limiting not supported on {dialect}")


async def check_rate_limit(
    db: AsyncSession,
    identifier: str,
    endpoint: str,
    limit: int,
    window_seconds: int = DEFAULT_WINDOW_SECONDS,
    now: datetime | None = None,
) -> bool:
    """
    Count this request against (identifier, endpoint).
    Returns False when the current window already holds `limit` requests.
    """
    now = now or utcnow()
    window_start = window_start_for(now, window_seconds)

    # Garbage-collect stale windows before reading
    await db.execute(
        delete(RateLimitCounter).where(
            RateLimitCounter.window_start < now - timedelta(seconds=window_seconds)
        )
    )

    result = await db.execute(
        select(RateLimitCounter.count).where(
            RateLimitCounter.identifier == identifier,
            RateLimitCounter.endpoint == endpoint,
            RateLimitCounter.window_start == window_start,
        )
    )
    count = result.scalar_one_or_none()
    if count is not None and count >= limit:
        await db.commit()
        return False

    stmt = _upsert(db).values(
        identifier=identifier,
        endpoint=endpoint,
        window_start=window_start,
        count=1,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["identifier", "endpoint", "window_start"],
        set_={"count": RateLimitCounter.count + 1},
    )
    await db.execute(stmt)
    # Persist the count even if the rest of the request fails
    await db.commit()
    return True
