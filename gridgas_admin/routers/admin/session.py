"""Session helpers, storage provisioning and app metadata."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, get_current_role, require_feature
from gridgas_admin.integrations.baas import BaasClient, get_baas_client
from gridgas_admin.schemas.session import AppInfoOut, BucketOut, RoleOut
from gridgas_admin.services.app_info import get_app_info
from gridgas_admin.services.session import verify_console_pin
from gridgas_admin.services.storage import AVATARS_BUCKET, ensure_avatars_bucket

router = APIRouter(tags=["Session"])


@router.get("/me/role", response_model=DataResponse[RoleOut])
@fallback_message("Failed to load role")
async def my_role(role: Optional[str] = Depends(get_current_role)):
    return DataResponse(data=RoleOut(role=role))


@router.post("/pin/verify")
async def verify_pin(request: Request):
    """Console unlock PIN. Returns a flat ``{ok}`` body, not the data envelope.

    A missing or unreadable body counts as an empty PIN.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    pin = payload.get("pin") if isinstance(payload, dict) else None
    result = verify_console_pin(pin)
    if not result["ok"]:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=result)
    return result


@router.post("/storage/ensure-avatars", response_model=DataResponse[BucketOut])
@fallback_message("Failed to prepare avatar storage")
async def ensure_avatars(
    user: AuthUser = Depends(require_feature("settings.profile")),
    baas: BaasClient = Depends(get_baas_client),
):
    created = await ensure_avatars_bucket(baas)
    return DataResponse(data=BucketOut(bucket=AVATARS_BUCKET, created=created))


@router.get("/app-info", response_model=DataResponse[AppInfoOut])
async def app_info():
    return DataResponse(data=AppInfoOut(**get_app_info()))
