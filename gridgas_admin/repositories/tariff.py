from __future__ import annotations

from sqlalchemy import select

from gridgas_admin.domain.tariff import GLOBAL_TARIFF_ID, BuildingTariffOverride, TariffSetting
from gridgas_admin.repositories.base import BaseRepository


class TariffRepository(BaseRepository[TariffSetting]):
    model = TariffSetting

    async def get_global(self) -> TariffSetting | None:
        return await self.get_by_id(GLOBAL_TARIFF_ID)

    async def latest_active(self) -> TariffSetting | None:
        stmt = (
            select(TariffSetting)
            .where(TariffSetting.is_active.is_(True))
            .order_by(TariffSetting.created_at.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalars().first()

    async def upsert_global(self, **values) -> TariffSetting:
        if await self.get_global() is None:
            return await self.create(id=GLOBAL_TARIFF_ID, **values)
        return await self.update(GLOBAL_TARIFF_ID, **values)  # type: ignore[return-value]


class BuildingOverrideRepository(BaseRepository[BuildingTariffOverride]):
    model = BuildingTariffOverride

    async def get_for_building(self, building_id: str) -> BuildingTariffOverride | None:
        stmt = select(BuildingTariffOverride).where(BuildingTariffOverride.building_id == building_id)
        return (await self._session.execute(stmt)).scalars().first()

    async def latest_active_for_building(self, building_id: str) -> BuildingTariffOverride | None:
        stmt = (
            select(BuildingTariffOverride)
            .where(
                BuildingTariffOverride.building_id == building_id,
                BuildingTariffOverride.is_active.is_(True),
            )
            .order_by(BuildingTariffOverride.created_at.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalars().first()

    async def upsert(self, building_id: str, rate_per_kg: float) -> BuildingTariffOverride:
        existing = await self.get_for_building(building_id)
        if existing is None:
            return await self.create(building_id=building_id, rate_per_kg=rate_per_kg, is_active=True)
        return await self.update(existing.id, rate_per_kg=rate_per_kg, is_active=True)  # type: ignore[return-value]
