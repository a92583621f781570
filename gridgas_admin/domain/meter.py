"""SQLAlchemy ORM models for meters and physical assets."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin, _now


class Meter(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "meters"

    meter_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    tenant_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    building_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # "active" | "locked" | "inactive"
    status: Mapped[str] = mapped_column(String(50), default="active", nullable=False)


class Asset(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "assets"

    # "meter" | "tank" | "changeover"
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    serial: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    meter_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    manufacturer: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    firmware_version: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    capacity_kg: Mapped[Optional[float]] = mapped_column(Numeric(12, 3, asdecimal=False), nullable=True)
    building_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    install_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)


class AssetAssignment(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One custody period of an asset. At most one open ("assigned") row per asset."""

    __tablename__ = "asset_assignments"
    __table_args__ = (
        Index(
            "uq_asset_assignments_open_asset",
            "asset_id",
            unique=True,
            sqlite_where=text("status = 'assigned'"),
            postgresql_where=text("status = 'assigned'"),
        ),
    )

    asset_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # "fm" | "tenant"
    assigned_to_type: Mapped[str] = mapped_column(String(20), default="fm", nullable=False)
    assigned_to_fm_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    assigned_to_tenant_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    building_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    # "assigned" | "retrieved"
    status: Mapped[str] = mapped_column(String(20), default="assigned", nullable=False, index=True)
    assigned_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)
    retrieved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
