"""Meter, asset and asset-custody queries."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select, update

from gridgas_admin.domain.meter import Asset, AssetAssignment, Meter
from gridgas_admin.repositories.base import BaseRepository, utcnow


class MeterRepository(BaseRepository[Meter]):
    model = Meter

    async def get_by_number(self, meter_number: str) -> Meter | None:
        stmt = select(Meter).where(Meter.meter_number == meter_number).limit(1)
        return (await self._session.execute(stmt)).scalars().first()


class AssetRepository(BaseRepository[Asset]):
    model = Asset


class AssetAssignmentRepository(BaseRepository[AssetAssignment]):
    model = AssetAssignment

    async def open_for_assets(self, asset_ids: Sequence[str]) -> list[AssetAssignment]:
        if not asset_ids:
            return []
        stmt = select(AssetAssignment).where(
            AssetAssignment.asset_id.in_(list(asset_ids)),
            AssetAssignment.status == "assigned",
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def close_open(self, asset_ids: Sequence[str], when: datetime | None = None) -> list[str]:
        """Mark every open assignment of *asset_ids* as retrieved. Returns the closed ids."""
        open_ids = [a.id for a in await self.open_for_assets(asset_ids)]
        if not open_ids:
            return []
        when = when or utcnow()
        await self._session.execute(
            update(AssetAssignment)
            .where(AssetAssignment.id.in_(open_ids))
            .values(status="retrieved", retrieved_at=when, updated_at=when)
        )
        await self._session.flush()
        return open_ids
