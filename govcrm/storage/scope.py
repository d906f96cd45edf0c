"""Tenant-scoped data access.

Every handler reaches the database through a TenantScope built from the
verified identity, so the tenant predicate is applied in one place.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from govcrm.auth.middleware import Identity, IdentityDep, client_ip
from govcrm.database import get_db
from govcrm.errors import NotFound, ValidationError
from govcrm.models import ActivityLogEntry

ModelT = TypeVar("ModelT")


class TenantScope:
    """Database access bound to a single tenant."""

    def __init__(self, db: AsyncSession, identity: Identity, ip_address: str | None = None):
        self.db = db
        self.identity = identity
        self.ip_address = ip_address

    @property
    def tenant_id(self) -> int:
        return self.identity.tenant_id

    def select(self, model: type[ModelT], *criteria: Any) -> Select:
        """SELECT over `model` restricted to the caller's tenant."""
        return select(model).where(model.tenant_id == self.tenant_id, *criteria)

    def filter(self, stmt: Select, *models: Any) -> Select:
        """Add the tenant predicate for each model to an arbitrary statement."""
        return stmt.where(*(m.tenant_id == self.tenant_id for m in models))

    async def all(self, stmt: Select) -> list:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, model: type[ModelT], id_: int, label: str) -> ModelT:
        """Row by id; missing and cross-tenant rows are both NotFound."""
        result = await self.db.execute(self.select(model, model.id == id_))
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFound(f"{label} not found")
        return row

    async def ensure_reference(self, model: type, id_: int | None, label: str) -> None:
        """Reject client-supplied foreign keys pointing outside the tenant."""
        if id_ is None:
            return
        result = await self.db.execute(
            select(model.id).where(model.id == id_, model.tenant_id == self.tenant_id)
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError(f"{label} not found", details={"id": id_})

    async def add(self, obj: ModelT) -> ModelT:
        """Stamp the caller's tenant on a new row and flush it."""
        obj.tenant_id = self.tenant_id
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def log(
        self,
        activity_type: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        description: str | None = None,
    ) -> ActivityLogEntry:
        """Append an activity log entry for the caller."""
        entry = ActivityLogEntry(
            user_id=self.identity.user_id,
            activity_type=activity_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            ip_address=self.ip_address,
        )
        return await self.add(entry)

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator["TenantScope"]:
        """Commit everything written inside the block, or roll it all back."""
        try:
            yield self
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise


async def get_scope(
    request: Request,
    identity: IdentityDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantScope:
    return TenantScope(db, identity, ip_address=client_ip(request))


ScopeDep = Annotated[TenantScope, Depends(get_scope)]
