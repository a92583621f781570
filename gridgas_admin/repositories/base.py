"""Generic async repository with simple filtering and bulk updates."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository over one table.

    The hosted database owns row-level security; this service always runs with
    service-role privileges, so there is no per-tenant filter here.
    """

    model: type[ModelT]
    pk: str = "id"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _pk_col(self):
        return getattr(self.model, self.pk)

    def _apply_filters(self, q, filters: dict[str, Any] | None):
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)
        return q

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: Any) -> ModelT | None:
        return await self._session.get(self.model, entity_id)

    async def get_many(self, entity_ids: Sequence[Any]) -> list[ModelT]:
        if not entity_ids:
            return []
        result = await self._session.execute(
            select(self.model).where(self._pk_col.in_(list(entity_ids)))
        )
        return list(result.scalars().all())

    async def list(
        self,
        *,
        limit: int | None = None,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
    ) -> list[ModelT]:
        """Return rows matching simple equality *filters*, newest first by default."""
        q = self._apply_filters(select(self.model), filters)

        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        if limit:
            q = q.limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: Any, **kwargs: Any) -> ModelT | None:
        kwargs.pop(self.pk, None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = utcnow()

        await self._session.execute(
            update(self.model).where(self._pk_col == entity_id).values(**kwargs)
        )
        await self._session.flush()
        instance = await self.get_by_id(entity_id)
        if instance is not None:
            await self._session.refresh(instance)
        return instance

    async def update_many(self, entity_ids: Sequence[Any], **kwargs: Any) -> list[Any]:
        """Update every row whose key is in *entity_ids*; return the keys that existed."""
        existing = [getattr(row, self.pk) for row in await self.get_many(entity_ids)]
        if not existing:
            return []
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = utcnow()
        await self._session.execute(
            update(self.model).where(self._pk_col.in_(existing)).values(**kwargs)
        )
        await self._session.flush()
        return existing

    async def delete(self, entity_id: Any) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self._pk_col == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0

    async def delete_many(self, entity_ids: Sequence[Any]) -> int:
        if not entity_ids:
            return 0
        result = await self._session.execute(
            delete(self.model).where(self._pk_col.in_(list(entity_ids)))
        )
        await self._session.flush()
        return result.rowcount
