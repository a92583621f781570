"""Asset registration and custody (assign to FM / retrieve)."""

from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, NotFoundError
from gridgas_admin.core.numbers import is_finite
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.meter import Asset
from gridgas_admin.repositories.base import utcnow
from gridgas_admin.repositories.meter import (
    AssetAssignmentRepository,
    AssetRepository,
    MeterRepository,
)
from gridgas_admin.repositories.people import FacilityManagerRepository
from gridgas_admin.services.audit import AuditTrail

ASSET_TYPES = ("meter", "tank", "changeover")


class AssetService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._actor = actor
        self._audit = AuditTrail(session, request, actor)
        self._assets = AssetRepository(session)
        self._assignments = AssetAssignmentRepository(session)
        self._meters = MeterRepository(session)
        self._fms = FacilityManagerRepository(session)

    async def create_asset(
        self,
        type: str | None,
        serial: str | None = None,
        meter_number: str | None = None,
        manufacturer: str | None = None,
        firmware_version: str | None = None,
        capacity_kg: Any = None,
        building_id: str | None = None,
        install_address: str | None = None,
    ) -> Asset:
        if not type:
            raise BadRequestError("Missing type")
        if type not in ASSET_TYPES:
            raise BadRequestError(f"type must be one of: {', '.join(ASSET_TYPES)}")

        if capacity_kg is not None:
            if isinstance(capacity_kg, bool) or not isinstance(capacity_kg, (int, float)) or not is_finite(float(capacity_kg)):
                raise BadRequestError("capacityKg must be a valid number")
            if capacity_kg < 0:
                raise BadRequestError("capacityKg cannot be negative")

        meter_id = None
        if type == "meter":
            meter_number = (meter_number or "").strip()
            if not meter_number:
                raise BadRequestError("meterNumber is required for meter assets")
            meter = await self._meters.get_by_number(meter_number)
            if meter is None:
                raise NotFoundError(f"Meter not found: {meter_number}")
            meter_id = meter.id
            serial = meter.meter_number
        else:
            serial = (serial or "").strip() or None
            if not serial:
                raise BadRequestError("serial is required for non-meter assets")

        values = {
            "type": type,
            "meter_id": meter_id,
            "serial": serial,
            "manufacturer": manufacturer,
            "firmware_version": firmware_version,
            "capacity_kg": capacity_kg,
            "building_id": building_id,
            "install_address": install_address,
            "created_by": self._actor.id,
        }
        asset = await self._assets.create(**values)
        await self._audit.record("created_asset", "asset", asset.id, new_value=values)
        return asset

    async def assign_to_fm(self, asset_ids: Any, fm_id: str | None, note: str | None = None) -> int:
        """Close any open custody for the assets, then open a new one with the FM."""
        raw = asset_ids if isinstance(asset_ids, list) else []
        # One open custody row per asset
        ids = list(dict.fromkeys(a.strip() for a in raw if isinstance(a, str) and a.strip()))
        fm_id = (fm_id or "").strip()
        if not ids:
            raise BadRequestError("assetIds is required")
        if not fm_id:
            raise BadRequestError("fmId is required")

        fm = await self._fms.get_by_id(fm_id)
        now = utcnow()
        await self._assignments.close_open(ids, when=now)
        for asset_id in ids:
            await self._assignments.create(
                asset_id=asset_id,
                assigned_to_type="fm",
                assigned_to_fm_id=fm_id,
                assigned_to_tenant_id=None,
                status="assigned",
                assigned_by=self._actor.id,
                assigned_at=now,
                note=note,
            )

        await self._audit.record(
            "assigned_assets",
            "asset_assignment",
            None,
            new_value={
                "assetIds": ids,
                "fmId": fm_id,
                "fm_name": fm.full_name if fm else None,
                "fm_email": fm.email if fm else None,
            },
            metadata={"count": len(ids), "note": note},
        )
        return len(ids)

    async def retrieve(self, asset_id: str) -> int:
        asset_id = (asset_id or "").strip()
        if not asset_id:
            raise BadRequestError("Missing asset id")

        closed = await self._assignments.close_open([asset_id])
        if closed:
            await self._audit.record(
                "retrieved_asset",
                "asset",
                asset_id,
                old_value={"status": "assigned"},
                new_value={"status": "retrieved"},
                metadata={"assignment_ids": closed},
            )
        return len(closed)
