"""Facility-manager moderation: block/unblock and bulk meter lock for an FM's tenants."""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, NotFoundError
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.people import FmProfile
from gridgas_admin.repositories.meter import MeterRepository
from gridgas_admin.repositories.people import FacilityManagerRepository, TenantRepository
from gridgas_admin.services.audit import AuditTrail


@dataclass
class MeterBulkResult:
    count: int
    message: str


class FacilityManagerService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._audit = AuditTrail(session, request, actor)
        self._fms = FacilityManagerRepository(session)
        self._tenants = TenantRepository(session)
        self._meters = MeterRepository(session)

    async def set_status(self, fm_id: str, status: str | None) -> FmProfile:
        status = (status or "").strip()
        if not status:
            raise BadRequestError("status is required")

        fm = await self._fms.get_by_id(fm_id)
        if fm is None:
            raise NotFoundError("Facility manager not found")
        old_status = fm.status

        fm = await self._fms.update(fm_id, status=status)
        await self._audit.record(
            "blocked_fm" if status == "blocked" else "unblocked_fm",
            "fm_profile",
            fm_id,
            old_value={"status": old_status},
            new_value={"status": status},
            metadata={"fm_name": fm.full_name, "fm_email": fm.email},
        )
        return fm  # type: ignore[return-value]

    async def set_meters_locked(self, fm_id: str, locked: bool) -> MeterBulkResult:
        """Lock (or unlock) every meter of the tenants this FM has claimed."""
        fm_id = (fm_id or "").strip()
        if not fm_id:
            raise BadRequestError("Missing FM id")

        tenant_count, meter_ids = await self._tenants.meters_claimed_by(fm_id)
        if tenant_count == 0:
            return MeterBulkResult(0, "No tenants found for this FM")
        if not meter_ids:
            return MeterBulkResult(0, "No meters found for this FM's tenants")

        status = "locked" if locked else "active"
        updated = await self._meters.update_many(meter_ids, status=status)

        verb = "locked" if locked else "unlocked"
        await self._audit.record(
            f"{verb}_all_meters_for_fm",
            "fm_profiles",
            fm_id,
            new_value={f"{verb}_count": len(updated)},
            metadata={"meter_ids_count": len(meter_ids)},
        )
        return MeterBulkResult(len(updated), f"{verb.capitalize()} {len(updated)} meter(s)")
