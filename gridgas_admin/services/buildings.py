"""Building list and map reads, each row enriched with FM contact and tenant count."""

import math
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.numbers import is_finite, to_number
from gridgas_admin.domain.building import Building
from gridgas_admin.repositories.building import BuildingRepository
from gridgas_admin.repositories.people import FacilityManagerRepository

MAX_LIST_LIMIT = 200


def clamp_limit(raw: Any) -> int:
    """0 (no limit) .. 200; anything non-numeric means no limit."""
    n = to_number(raw)
    if not is_finite(n):
        return 0
    return max(0, min(MAX_LIST_LIMIT, math.floor(n)))


class BuildingService:
    def __init__(self, session: AsyncSession):
        self._buildings = BuildingRepository(session)
        self._fms = FacilityManagerRepository(session)

    async def _enrich(self, buildings: list[Building]) -> list[dict]:
        fm_ids = list({b.fm_id for b in buildings if b.fm_id})
        fms = {fm.id: fm for fm in await self._fms.get_many(fm_ids)}
        counts = await self._buildings.tenant_counts([b.id for b in buildings])

        rows = []
        for b in buildings:
            fm = fms.get(b.fm_id) if b.fm_id else None
            rows.append(
                {
                    "building": b,
                    "fm": {"full_name": fm.full_name, "email": fm.email} if fm else None,
                    "tenant_count": counts.get(b.id, 0),
                }
            )
        return rows

    async def list_buildings(self, fm_id: str | None = None, q: str | None = None, limit: Any = None) -> list[dict]:
        buildings = await self._buildings.search(
            fm_id=fm_id or None,
            q=(q or "").strip() or None,
            limit=clamp_limit(limit),
        )
        return await self._enrich(buildings)

    async def map_buildings(self) -> list[dict]:
        return await self._enrich(await self._buildings.list_with_coordinates())
