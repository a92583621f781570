"""SQLAlchemy ORM models for global and per-building gas tariffs."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin

GLOBAL_TARIFF_ID = 1


class TariffSetting(Base, TimestampMixin):
    """The global tariff. A single row with id=1 is upserted."""

    __tablename__ = "tariff_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=GLOBAL_TARIFF_ID)
    global_rate_per_kg: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    uplift_first_n_kg_per_month: Mapped[float] = mapped_column(
        Numeric(12, 3, asdecimal=False), default=0, nullable=False
    )
    uplift_amount_per_kg: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), default=0, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class BuildingTariffOverride(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "building_tariff_overrides"

    building_id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)
    rate_per_kg: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
