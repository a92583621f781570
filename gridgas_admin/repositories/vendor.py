"""Gas vendor repositories: vendors, signup profiles, plants, prices, deliveries."""

from __future__ import annotations

from sqlalchemy import select, update

from gridgas_admin.domain.vendor import (
    GasVendor,
    VendorDelivery,
    VendorPlant,
    VendorPricingHistory,
    VendorProfile,
)
from gridgas_admin.repositories.base import BaseRepository, utcnow


class GasVendorRepository(BaseRepository[GasVendor]):
    model = GasVendor


class VendorProfileRepository(BaseRepository[VendorProfile]):
    model = VendorProfile

    async def latest_for_vendor(self, vendor_id: str) -> VendorProfile | None:
        stmt = (
            select(VendorProfile)
            .where(VendorProfile.vendor_id == vendor_id)
            .order_by(VendorProfile.created_at.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalars().first()


class VendorPlantRepository(BaseRepository[VendorPlant]):
    model = VendorPlant

    async def approve_pending(self, vendor_id: str) -> int:
        result = await self._session.execute(
            update(VendorPlant)
            .where(VendorPlant.vendor_id == vendor_id, VendorPlant.status == "pending_approval")
            .values(status="approved", updated_at=utcnow())
        )
        await self._session.flush()
        return result.rowcount


class VendorPricingRepository(BaseRepository[VendorPricingHistory]):
    model = VendorPricingHistory

    async def current_for_vendor(self, vendor_id: str) -> VendorPricingHistory | None:
        stmt = (
            select(VendorPricingHistory)
            .where(
                VendorPricingHistory.vendor_id == vendor_id,
                VendorPricingHistory.effective_until.is_(None),
            )
            .order_by(VendorPricingHistory.effective_from.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalars().first()


class VendorDeliveryRepository(BaseRepository[VendorDelivery]):
    model = VendorDelivery
