"""Building queries used by the console list and map screens."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_, select

from gridgas_admin.domain.building import Building
from gridgas_admin.domain.people import TenantProfile
from gridgas_admin.repositories.base import BaseRepository


class BuildingRepository(BaseRepository[Building]):
    model = Building

    async def search(
        self,
        *,
        fm_id: str | None = None,
        q: str | None = None,
        limit: int = 0,
    ) -> list[Building]:
        """Filter by FM and a case-insensitive address/name substring. ``limit=0`` means no limit."""
        stmt = select(Building).order_by(Building.created_at.desc())
        if fm_id:
            stmt = stmt.where(Building.fm_id == fm_id)
        if q:
            pattern = f"%{q.replace('%', '')}%"
            stmt = stmt.where(or_(Building.address.ilike(pattern), Building.name.ilike(pattern)))
        if limit > 0:
            stmt = stmt.limit(limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_with_coordinates(self) -> list[Building]:
        stmt = (
            select(Building)
            .where(Building.latitude.is_not(None), Building.longitude.is_not(None))
            .order_by(Building.created_at.desc())
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def tenant_counts(self, building_ids: Sequence[str]) -> dict[str, int]:
        if not building_ids:
            return {}
        stmt = (
            select(TenantProfile.building_id, func.count(TenantProfile.id))
            .where(TenantProfile.building_id.in_(list(building_ids)))
            .group_by(TenantProfile.building_id)
        )
        return {building_id: count for building_id, count in (await self._session.execute(stmt)).all()}
