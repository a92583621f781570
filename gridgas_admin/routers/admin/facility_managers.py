from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.people import FmOut, FmStatusRequest, MeterBulkOut
from gridgas_admin.services.facility_managers import FacilityManagerService

router = APIRouter(prefix="/facility-managers", tags=["Facility managers"])


@router.post("/{fm_id}/status", response_model=DataResponse[FmOut])
@fallback_message("Failed to update facility manager status")
async def set_fm_status(
    fm_id: str,
    body: FmStatusRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("fms.block")),
    session: AsyncSession = Depends(get_db),
):
    fm = await FacilityManagerService(session, user, request).set_status(fm_id, body.status)
    return DataResponse(data=FmOut.model_validate(fm))


@router.post("/{fm_id}/lock-meters", response_model=DataResponse[MeterBulkOut])
@fallback_message("Failed to lock meters")
async def lock_fm_meters(
    fm_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("fms.lock_meters")),
    session: AsyncSession = Depends(get_db),
):
    result = await FacilityManagerService(session, user, request).set_meters_locked(fm_id, True)
    return DataResponse(data=MeterBulkOut(count=result.count, message=result.message))


@router.post("/{fm_id}/unlock-meters", response_model=DataResponse[MeterBulkOut])
@fallback_message("Failed to unlock meters")
async def unlock_fm_meters(
    fm_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("fms.lock_meters")),
    session: AsyncSession = Depends(get_db),
):
    result = await FacilityManagerService(session, user, request).set_meters_locked(fm_id, False)
    return DataResponse(data=MeterBulkOut(count=result.count, message=result.message))
