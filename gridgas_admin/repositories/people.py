from __future__ import annotations

from sqlalchemy import select

from gridgas_admin.domain.people import FmProfile, TenantProfile
from gridgas_admin.repositories.base import BaseRepository


class FacilityManagerRepository(BaseRepository[FmProfile]):
    model = FmProfile


class TenantRepository(BaseRepository[TenantProfile]):
    model = TenantProfile

    async def meters_claimed_by(self, fm_id: str) -> tuple[int, list[str]]:
        """(number of tenants claimed by *fm_id*, their non-empty meter ids)."""
        stmt = select(TenantProfile.meter_id).where(TenantProfile.claimed_by_fm_id == fm_id)
        meter_ids = list((await self._session.execute(stmt)).scalars().all())
        return len(meter_ids), [m for m in meter_ids if m]
