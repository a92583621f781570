"""SQLAlchemy ORM models for facility managers and tenants."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class FmProfile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "fm_profiles"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # "active" | "blocked" | "pending"
    status: Mapped[str] = mapped_column(String(50), default="active", nullable=False)


class TenantProfile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "tenant_profiles"

    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    customer_id: Mapped[Optional[str]] = mapped_column(String(50), index=True, nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    building_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    meter_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    claimed_by_fm_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    # "claimed" | "unclaimed" | "pending"; NULL means derive from claimed_by_fm_id
    claim_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
