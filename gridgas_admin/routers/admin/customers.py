"""Tenant list, customer detail and per-customer account actions."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.people import (
    CustomerDetailOut,
    FmContact,
    MeterActionOut,
    MeterVendOut,
    ReassignFmOut,
    ReassignFmRequest,
    TenantListOut,
    TenantOut,
    WalletBalanceOut,
    WalletTransactionOut,
)
from gridgas_admin.schemas.vend import PurchaseOut
from gridgas_admin.services.customers import CustomerService, derive_claim_status

router = APIRouter(tags=["Customers"])


def _tenant_out(row: dict) -> TenantOut:
    out = TenantOut.model_validate(row["tenant"])
    out.claim_status = row["claim_status"]
    fm = row.get("claimed_by_fm")
    out.claimed_by_fm = FmContact.model_validate(fm) if fm else None
    return out


@router.get("/tenants", response_model=DataResponse[TenantListOut])
@fallback_message("Failed to load tenants")
async def list_tenants(
    building_id: Optional[str] = Query(default=None, alias="buildingId"),
    tenant_id: Optional[str] = Query(default=None, alias="tenantId"),
    claimed_by_fm_id: Optional[str] = Query(default=None, alias="claimedByFmId"),
    user: AuthUser = Depends(require_feature("customers.view")),
    session: AsyncSession = Depends(get_db),
):
    rows = await CustomerService(session, user).list_tenants(building_id, tenant_id, claimed_by_fm_id)
    tenants = [_tenant_out(r) for r in rows]
    single = tenants[0] if tenant_id and tenants else None
    return DataResponse(data=TenantListOut(tenants=tenants, tenant=single))


@router.get("/customers/{tenant_id}", response_model=DataResponse[CustomerDetailOut])
@fallback_message("Failed to load customer")
async def get_customer(
    tenant_id: str,
    user: AuthUser = Depends(require_feature("customers.view")),
    session: AsyncSession = Depends(get_db),
):
    detail = await CustomerService(session, user).get_detail(tenant_id)
    tenant = TenantOut.model_validate(detail.tenant)
    tenant.claim_status = derive_claim_status(detail.tenant)
    return DataResponse(
        data=CustomerDetailOut(
            tenant=tenant,
            tenant_user_id=detail.tenant_user_id,
            purchases=[PurchaseOut.model_validate(p) for p in detail.purchases],
            balance=WalletBalanceOut.model_validate(detail.balance) if detail.balance else None,
            wallet_transactions=[WalletTransactionOut.model_validate(t) for t in detail.wallet_transactions],
            vends=[MeterVendOut.model_validate(v) for v in detail.vends],
        )
    )


@router.post("/customers/{tenant_id}/lock-meter", response_model=DataResponse[MeterActionOut])
@fallback_message("Failed to lock meter")
async def lock_customer_meter(
    tenant_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("customers.lock_meter")),
    session: AsyncSession = Depends(get_db),
):
    meter = await CustomerService(session, user, request).set_meter_locked(tenant_id, True)
    return DataResponse(data=MeterActionOut(meter_id=meter.id, status=meter.status, message="Meter locked"))


@router.post("/customers/{tenant_id}/unlock-meter", response_model=DataResponse[MeterActionOut])
@fallback_message("Failed to unlock meter")
async def unlock_customer_meter(
    tenant_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("customers.lock_meter")),
    session: AsyncSession = Depends(get_db),
):
    meter = await CustomerService(session, user, request).set_meter_locked(tenant_id, False)
    return DataResponse(data=MeterActionOut(meter_id=meter.id, status=meter.status, message="Meter unlocked"))


@router.post("/customers/{tenant_id}/reassign-fm", response_model=DataResponse[ReassignFmOut])
@fallback_message("Failed to reassign facility manager")
async def reassign_customer_fm(
    tenant_id: str,
    body: ReassignFmRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("customers.reassign_fm")),
    session: AsyncSession = Depends(get_db),
):
    tenant = await CustomerService(session, user, request).reassign_fm(tenant_id, body.fm_id)
    return DataResponse(data=ReassignFmOut(tenant=TenantOut.model_validate(tenant)))
