"""Tenant (customer) reads and account actions."""

from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, NotFoundError
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.meter import Meter
from gridgas_admin.domain.people import FmProfile, TenantProfile
from gridgas_admin.repositories.meter import MeterRepository
from gridgas_admin.repositories.people import FacilityManagerRepository, TenantRepository
from gridgas_admin.repositories.purchase import (
    MeterVendRepository,
    PurchaseRepository,
    WalletBalanceRepository,
    WalletTransactionRepository,
)
from gridgas_admin.services.audit import AuditTrail

HISTORY_LIMIT = 20


def derive_claim_status(tenant: TenantProfile) -> str:
    if tenant.claim_status:
        return tenant.claim_status
    return "claimed" if tenant.claimed_by_fm_id else "unclaimed"


@dataclass
class CustomerDetail:
    tenant: TenantProfile
    tenant_user_id: str | None
    purchases: list = field(default_factory=list)
    balance: Any = None
    wallet_transactions: list = field(default_factory=list)
    vends: list = field(default_factory=list)


class CustomerService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._audit = AuditTrail(session, request, actor)
        self._tenants = TenantRepository(session)
        self._fms = FacilityManagerRepository(session)
        self._meters = MeterRepository(session)
        self._purchases = PurchaseRepository(session)
        self._vends = MeterVendRepository(session)
        self._balances = WalletBalanceRepository(session)
        self._wallet_tx = WalletTransactionRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_tenants(
        self,
        building_id: str | None = None,
        tenant_id: str | None = None,
        claimed_by_fm_id: str | None = None,
    ) -> list[dict]:
        """Tenants newest first, each with a derived claim status and the claiming FM."""
        tenants = await self._tenants.list(
            filters={
                "building_id": building_id or None,
                "id": tenant_id or None,
                "claimed_by_fm_id": claimed_by_fm_id or None,
            }
        )
        fm_ids = {t.claimed_by_fm_id for t in tenants if t.claimed_by_fm_id}
        fms: dict[str, FmProfile] = {fm.id: fm for fm in await self._fms.get_many(list(fm_ids))}

        return [
            {
                "tenant": t,
                "claim_status": derive_claim_status(t),
                "claimed_by_fm": fms.get(t.claimed_by_fm_id) if t.claimed_by_fm_id else None,
            }
            for t in tenants
        ]

    async def get_detail(self, tenant_id: str) -> CustomerDetail:
        tenant = await self._tenants.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")

        purchases = await self._purchases.list(limit=HISTORY_LIMIT, filters={"tenant_id": tenant_id})
        detail = CustomerDetail(tenant=tenant, tenant_user_id=tenant.user_id, purchases=purchases)

        if tenant.user_id:
            detail.balance = await self._balances.get_by_id(tenant.user_id)
            detail.wallet_transactions = await self._wallet_tx.list(
                limit=HISTORY_LIMIT, filters={"user_id": tenant.user_id}
            )

        detail.vends = await self._vends.recent_for_purchases([p.id for p in purchases], HISTORY_LIMIT)
        return detail

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def _require_tenant(self, tenant_id: str) -> TenantProfile:
        tenant_id = (tenant_id or "").strip()
        if not tenant_id:
            raise BadRequestError("Missing tenant id")
        tenant = await self._tenants.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def set_meter_locked(self, tenant_id: str, locked: bool) -> Meter:
        tenant = await self._require_tenant(tenant_id)
        meter = await self._meters.get_by_id(tenant.meter_id) if tenant.meter_id else None
        if meter is None:
            raise BadRequestError("No meter found for this tenant")

        status = "locked" if locked else "active"
        meter = await self._meters.update(meter.id, status=status)
        await self._audit.record(
            "locked_meter" if locked else "unlocked_meter",
            "meters",
            meter.id,
            new_value={"status": status},
            metadata={"tenant_id": tenant.id},
        )
        return meter  # type: ignore[return-value]

    async def reassign_fm(self, tenant_id: str, fm_id: Any) -> TenantProfile:
        if not fm_id or not isinstance(fm_id, str):
            raise BadRequestError("Missing or invalid fmId")

        tenant = await self._require_tenant(tenant_id)
        old_value = {"claimed_by_fm_id": tenant.claimed_by_fm_id, "claim_status": tenant.claim_status}

        fm = await self._fms.get_by_id(fm_id)
        if fm is None:
            raise NotFoundError("Facility manager not found")
        if fm.status != "active":
            raise BadRequestError("Selected FM is not active")

        tenant = await self._tenants.update(tenant.id, claimed_by_fm_id=fm_id, claim_status="claimed")
        await self._audit.record(
            "reassigned_tenant_fm",
            "tenant_profiles",
            tenant.id,
            old_value=old_value,
            new_value={"claimed_by_fm_id": fm_id, "claim_status": "claimed"},
        )
        return tenant  # type: ignore[return-value]
