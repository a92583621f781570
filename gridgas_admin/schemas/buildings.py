from __future__ import annotations

from datetime import datetime

from gridgas_admin.schemas.common import CamelModel


class FmInfo(CamelModel):
    full_name: str | None = None
    email: str | None = None


class BuildingOut(CamelModel):
    id: str
    name: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    photo_url: str | None = None
    fm_id: str | None = None
    created_at: datetime
    fm: FmInfo | None = None
    tenant_count: int = 0


class BuildingListOut(CamelModel):
    buildings: list[BuildingOut]
