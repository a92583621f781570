"""Gas vendor onboarding (create, approve, reject), vendor detail and deliveries."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, NotFoundError
from gridgas_admin.core.numbers import is_finite, to_number
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.vendor import GasVendor, VendorDelivery, VendorPricingHistory, VendorProfile
from gridgas_admin.integrations.email import EmailSendError, send_vendor_approved_email
from gridgas_admin.repositories.base import utcnow
from gridgas_admin.repositories.vendor import (
    GasVendorRepository,
    VendorDeliveryRepository,
    VendorPlantRepository,
    VendorPricingRepository,
    VendorProfileRepository,
)
from gridgas_admin.services.audit import AuditTrail

logger = logging.getLogger(__name__)

DELIVERY_STATUSES = ("ongoing", "completed", "cancelled")
PRICE_HISTORY_LIMIT = 20


@dataclass
class VendorDetail:
    vendor: GasVendor
    profile: VendorProfile | None = None
    current_price: VendorPricingHistory | None = None
    price_history: list = field(default_factory=list)
    plants: list = field(default_factory=list)


def _is_json_number(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and is_finite(float(value))


class VendorService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._session = session
        self._actor = actor
        self._audit = AuditTrail(session, request, actor)
        self._vendors = GasVendorRepository(session)
        self._profiles = VendorProfileRepository(session)
        self._plants = VendorPlantRepository(session)
        self._prices = VendorPricingRepository(session)
        self._deliveries = VendorDeliveryRepository(session)

    # ------------------------------------------------------------------
    # Vendors
    # ------------------------------------------------------------------

    async def create_vendor(
        self,
        name: str | None,
        plant_location: str | None = None,
        capacity_kg: Any = None,
        active: bool | None = None,
    ) -> GasVendor:
        name = (name or "").strip()
        if not name:
            raise BadRequestError("name is required")

        values = {
            "name": name,
            "plant_location": plant_location,
            "capacity_kg": capacity_kg,
            "active": True if active is None else active,
            "created_by": self._actor.id,
        }
        vendor = await self._vendors.create(**values)
        await self._audit.record("created_vendor", "gas_vendor", vendor.id, new_value=values)
        return vendor

    async def get_detail(self, vendor_id: str) -> VendorDetail:
        vendor = await self._vendors.get_by_id(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor not found")

        return VendorDetail(
            vendor=vendor,
            profile=await self._profiles.latest_for_vendor(vendor_id),
            current_price=await self._prices.current_for_vendor(vendor_id),
            price_history=await self._prices.list(
                limit=PRICE_HISTORY_LIMIT,
                order_by="effective_from",
                filters={"vendor_id": vendor_id},
            ),
            plants=await self._plants.list(filters={"vendor_id": vendor_id}),
        )

    async def approve(self, vendor_id: Any, profile_id: Any, lat: Any, lng: Any) -> None:
        """Approve a signup profile, pin the plant and activate the vendor."""
        if not vendor_id or not profile_id:
            raise BadRequestError("vendorId and profileId are required")
        if not _is_json_number(lat) or not _is_json_number(lng):
            raise BadRequestError("Valid lat and lng coordinates are required")

        profile = await self._profiles.get_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Vendor profile not found")
        vendor = await self._vendors.get_by_id(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor not found")
        vendor_name = vendor.name

        await self._profiles.update(profile_id, status="approved")
        await self._vendors.update(
            vendor_id,
            plant_lat=float(lat),
            plant_lng=float(lng),
            verified_at=utcnow(),
            active=True,
        )

        # Plant approval is retryable from the vendor detail screen
        try:
            async with self._session.begin_nested():
                await self._plants.approve_pending(vendor_id)
        except SQLAlchemyError:
            logger.warning("Failed to approve pending plants for vendor %s", vendor_id, exc_info=True)

        await self._audit.record(
            "approve_vendor",
            "vendor_profiles",
            profile_id,
            metadata={"vendorId": vendor_id, "lat": lat, "lng": lng},
        )

        to = (profile.email or "").strip()
        if to:
            try:
                await send_vendor_approved_email(to, vendor_name)
            except (httpx.HTTPError, EmailSendError):
                logger.warning("Vendor approval email to %s failed", to, exc_info=True)

    async def reject(self, profile_id: Any) -> None:
        if not profile_id:
            raise BadRequestError("profileId is required")
        if await self._profiles.get_by_id(profile_id) is None:
            raise NotFoundError("Vendor profile not found")

        await self._profiles.update(profile_id, status="suspended")
        await self._audit.record("reject_vendor", "vendor_profiles", profile_id, metadata={})

    # ------------------------------------------------------------------
    # Deliveries
    # ------------------------------------------------------------------

    async def create_delivery(
        self,
        vendor_id: str | None,
        fm_id: str | None,
        quantity_kg: Any,
        status: str | None = None,
        delivered_at: datetime | None = None,
        proof_url: str | None = None,
        note: str | None = None,
    ) -> VendorDelivery:
        vendor_id = (vendor_id or "").strip()
        fm_id = (fm_id or "").strip()
        quantity = to_number(quantity_kg)

        if not vendor_id:
            raise BadRequestError("vendorId is required")
        if not fm_id:
            raise BadRequestError("fmId is required")
        if not is_finite(quantity) or quantity <= 0:
            raise BadRequestError("quantityKg must be > 0")

        status = status or "ongoing"
        if status not in DELIVERY_STATUSES:
            raise BadRequestError(f"status must be one of: {', '.join(DELIVERY_STATUSES)}")

        values = {
            "vendor_id": vendor_id,
            "fm_id": fm_id,
            "quantity_kg": quantity,
            "status": status,
            "delivered_at": delivered_at,
            "proof_url": proof_url,
            "note": note,
            "created_by": self._actor.id,
        }
        delivery = await self._deliveries.create(**values)
        await self._audit.record("created_delivery", "vendor_delivery", delivery.id, new_value=values)
        return delivery
