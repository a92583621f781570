"""SQLAlchemy ORM model for buildings."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Building(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "buildings"

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), index=True, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    # Managing facility manager (fm_profiles.id)
    fm_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
