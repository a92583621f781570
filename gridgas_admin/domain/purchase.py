"""SQLAlchemy ORM models for gas purchases, vend tokens and tenant wallets."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin


class GasPurchase(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "gas_purchases"

    tenant_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    meter_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    building_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    kg: Mapped[float] = mapped_column(Numeric(10, 3, asdecimal=False), nullable=False)
    amount_naira: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    rate_per_kg: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="NGN", nullable=False)

    # "token_pending" | "token_issued" | "sent" | "completed" | "failed"
    status: Mapped[str] = mapped_column(String(50), default="token_pending", nullable=False, index=True)
    idempotency_key: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    # "metadata" is reserved on declarative classes
    meta: Mapped[Optional[Any]] = mapped_column("metadata", JSON, nullable=True)


class MeterVend(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "meter_vends"

    purchase_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    meter_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    token: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(50), default="pending", nullable=False)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    acknowledged_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class WalletBalance(Base):
    __tablename__ = "wallet_balances"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    balance_naira: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), default=0, nullable=False)
    last_tx_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class WalletTransaction(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "wallet_transactions"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # "credit" | "debit"
    tx_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount_naira: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reference: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
