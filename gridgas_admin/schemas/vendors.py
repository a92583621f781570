"""Gas vendor, onboarding and delivery schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from gridgas_admin.schemas.common import CamelModel


class GasVendorCreate(CamelModel):
    name: str | None = None
    plant_location: str | None = None
    capacity_kg: float | None = None
    active: bool | None = None


class VendorApproveRequest(CamelModel):
    # lat/lng must be JSON numbers; checked by the service
    vendor_id: Any = None
    profile_id: Any = None
    lat: Any = None
    lng: Any = None


class VendorRejectRequest(CamelModel):
    profile_id: Any = None


class GasVendorOut(CamelModel):
    id: str
    name: str
    plant_location: str | None = None
    capacity_kg: float | None = None
    plant_lat: float | None = None
    plant_lng: float | None = None
    verified_at: datetime | None = None
    active: bool
    created_at: datetime


class VendorProfileOut(CamelModel):
    id: str
    vendor_id: str | None = None
    user_id: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str
    created_at: datetime


class VendorPlantOut(CamelModel):
    id: str
    vendor_id: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    capacity_kg: float | None = None
    ownership_type: str | None = None
    status: str
    created_at: datetime


class VendorPriceOut(CamelModel):
    id: str
    vendor_id: str
    price_per_kg: float
    effective_from: datetime
    effective_until: datetime | None = None
    created_by: str | None = None


class VendorDetailOut(CamelModel):
    vendor: GasVendorOut
    profile: VendorProfileOut | None = None
    current_price: VendorPriceOut | None = None
    price_history: list[VendorPriceOut] = []
    plants: list[VendorPlantOut] = []


class DeliveryCreate(CamelModel):
    vendor_id: str | None = None
    fm_id: str | None = None
    quantity_kg: Any = None
    status: str | None = None
    delivered_at: datetime | None = None
    proof_url: str | None = None
    note: str | None = None
