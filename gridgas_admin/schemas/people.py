"""Facility manager, tenant and customer-detail schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from gridgas_admin.schemas.common import CamelModel
from gridgas_admin.schemas.vend import PurchaseOut


class FmStatusRequest(CamelModel):
    status: str | None = None


class FmOut(CamelModel):
    id: str
    user_id: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str
    created_at: datetime


class FmContact(CamelModel):
    id: str
    full_name: str | None = None
    email: str | None = None


class MeterBulkOut(CamelModel):
    count: int
    message: str


class TenantOut(CamelModel):
    id: str
    user_id: str | None = None
    customer_id: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    building_id: str | None = None
    meter_id: str | None = None
    claimed_by_fm_id: str | None = None
    claim_status: str | None = None
    claimed_by_fm: FmContact | None = None
    created_at: datetime


class TenantListOut(CamelModel):
    tenants: list[TenantOut]
    tenant: TenantOut | None = None


class WalletBalanceOut(CamelModel):
    balance_naira: float
    last_tx_at: datetime | None = None


class WalletTransactionOut(CamelModel):
    id: str
    tx_type: str
    amount_naira: float
    description: str | None = None
    reference: str | None = None
    created_at: datetime


class MeterVendOut(CamelModel):
    id: str
    purchase_id: str
    token: str | None = None
    status: str
    sent_at: datetime | None = None
    acknowledged_at: datetime | None = None
    created_at: datetime


class CustomerDetailOut(CamelModel):
    tenant: TenantOut
    tenant_user_id: str | None = None
    purchases: list[PurchaseOut] = []
    balance: WalletBalanceOut | None = None
    wallet_transactions: list[WalletTransactionOut] = []
    vends: list[MeterVendOut] = []


class MeterActionOut(CamelModel):
    meter_id: str
    status: str
    message: str


class ReassignFmRequest(CamelModel):
    fm_id: Any = None


class ReassignFmOut(CamelModel):
    tenant: TenantOut
    message: str = "Tenant reassigned successfully"
