"""Manual vend request and result schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field

from gridgas_admin.schemas.common import CamelModel


class ManualVendRequest(CamelModel):
    # Loosely typed: numeric strings are accepted and validated by the service
    meter_id: Any = None
    amount_naira: Any = None
    note: str | None = None


class PurchaseOut(CamelModel):
    id: str
    tenant_id: str
    meter_id: str
    building_id: str | None = None
    kg: float
    amount_naira: float
    rate_per_kg: float
    currency: str
    status: str
    idempotency_key: str | None = None
    metadata: Any = Field(
        default=None,
        validation_alias=AliasChoices("meta", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime


class ManualVendOut(CamelModel):
    success: bool = True
    purchase: PurchaseOut
    token: str | None = None
    sent: Any = None
    message: str
