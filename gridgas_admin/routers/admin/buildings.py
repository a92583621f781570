from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.buildings import BuildingListOut, BuildingOut, FmInfo
from gridgas_admin.services.buildings import BuildingService

router = APIRouter(tags=["Buildings"])


def _building_out(row: dict) -> BuildingOut:
    out = BuildingOut.model_validate(row["building"])
    out.fm = FmInfo.model_validate(row["fm"]) if row["fm"] else None
    out.tenant_count = row["tenant_count"]
    return out


@router.get("/buildings", response_model=DataResponse[BuildingListOut])
@fallback_message("Failed to load buildings")
async def list_buildings(
    fm_id: Optional[str] = Query(default=None, alias="fmId"),
    q: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None, description="0..200, 0 means no limit"),
    user: AuthUser = Depends(require_feature("buildings.view")),
    session: AsyncSession = Depends(get_db),
):
    rows = await BuildingService(session).list_buildings(fm_id, q, limit)
    return DataResponse(data=BuildingListOut(buildings=[_building_out(r) for r in rows]))


@router.get("/map/buildings", response_model=DataResponse[BuildingListOut])
@fallback_message("Failed to load map buildings")
async def map_buildings(
    user: AuthUser = Depends(require_feature("map.view")),
    session: AsyncSession = Depends(get_db),
):
    rows = await BuildingService(session).map_buildings()
    return DataResponse(data=BuildingListOut(buildings=[_building_out(r) for r in rows]))
