from __future__ import annotations

from typing import Any

from gridgas_admin.schemas.common import CamelModel


class AssetCreate(CamelModel):
    type: str | None = None
    serial: str | None = None
    meter_number: str | None = None
    manufacturer: str | None = None
    firmware_version: str | None = None
    capacity_kg: Any = None
    building_id: str | None = None
    install_address: str | None = None


class AssignAssetsRequest(CamelModel):
    asset_ids: Any = None
    fm_id: str | None = None
    note: str | None = None


class AssignAssetsOut(CamelModel):
    assigned_count: int


class RetrieveAssetOut(CamelModel):
    retrieved_count: int
