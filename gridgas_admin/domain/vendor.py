"""SQLAlchemy ORM models for gas vendors, their plants, prices and deliveries.

A gas vendor is the supplier company; a vendor profile is the person who
signed up for it through the vendor app and goes through approval.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import (
    CreatedAtMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    _now,
)


class GasVendor(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "gas_vendors"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    plant_location: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    capacity_kg: Mapped[Optional[float]] = mapped_column(Numeric(14, 3, asdecimal=False), nullable=True)
    plant_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    plant_lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class VendorProfile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_profiles"

    vendor_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # "pending_verification" | "approved" | "suspended"
    status: Mapped[str] = mapped_column(
        String(50), default="pending_verification", nullable=False, index=True
    )


class VendorPlant(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_plants"

    vendor_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    capacity_kg: Mapped[Optional[float]] = mapped_column(Numeric(14, 3, asdecimal=False), nullable=True)
    # "owned" | "leased"
    ownership_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # "pending_approval" | "approved" | "rejected"
    status: Mapped[str] = mapped_column(String(50), default="pending_approval", nullable=False)


class VendorPricingHistory(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Price list entries. The open-ended row (no effective_until) is current."""

    __tablename__ = "vendor_pricing_history"

    vendor_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    price_per_kg: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    effective_from: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)
    effective_until: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class VendorDelivery(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_deliveries"

    vendor_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    fm_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    quantity_kg: Mapped[float] = mapped_column(Numeric(14, 3, asdecimal=False), nullable=False)

    # "ongoing" | "completed" | "cancelled"
    status: Mapped[str] = mapped_column(String(20), default="ongoing", nullable=False)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    proof_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
