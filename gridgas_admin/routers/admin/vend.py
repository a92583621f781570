"""Manual vend endpoint: thin HTTP layer over :mod:`gridgas_admin.services.vend`."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.integrations.baas import BaasClient, get_baas_client
from gridgas_admin.schemas.vend import ManualVendOut, ManualVendRequest, PurchaseOut
from gridgas_admin.services.vend import VendService

router = APIRouter(prefix="/vend", tags=["Vend"])


@router.post("/manual", response_model=DataResponse[ManualVendOut])
@fallback_message("Failed to process manual vend")
async def manual_vend(
    body: ManualVendRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("vend.manual")),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    """Buy gas on a tenant's behalf and push the token to their meter."""
    outcome = await VendService(session, baas, user, request).manual_vend(
        body.meter_id, body.amount_naira, body.note
    )
    return DataResponse(
        data=ManualVendOut(
            purchase=PurchaseOut.model_validate(outcome.purchase),
            token=outcome.token,
            sent=outcome.sent,
            message=outcome.message,
        )
    )
