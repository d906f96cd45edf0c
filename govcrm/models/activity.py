"""Activity log and rate-limit counter models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from govcrm.database import Base
from govcrm.models.base import TenantOwned, utcnow


class ActivityLogEntry(TenantOwned, Base):
    """Audit records - append-only."""

    __tablename__ = "activity_log"

    user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    activity_type: Mapped[str] = mapped_column(String(30), nullable=False)  # create|update|login
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, index=True
    )


class RateLimitCounter(Base):
    """Request count per (identifier, endpoint) within a fixed window."""

    __tablename__ = "rate_limits"
    __table_args__ = (
        UniqueConstraint(
            "identifier", "endpoint", "window_start", name="uq_rate_limits_key"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str] = mapped_column(String(255), nullable=False)
    endpoint: Mapped[str] = mapped_column(String(255), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    window_start: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
