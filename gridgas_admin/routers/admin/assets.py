from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.assets import (
    AssetCreate,
    AssignAssetsOut,
    AssignAssetsRequest,
    RetrieveAssetOut,
)
from gridgas_admin.schemas.common import CreatedId
from gridgas_admin.services.assets import AssetService

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.post("", response_model=DataResponse[CreatedId], status_code=status.HTTP_201_CREATED)
@fallback_message("Failed to create asset")
async def create_asset(
    body: AssetCreate,
    request: Request,
    user: AuthUser = Depends(require_feature("assets.create")),
    session: AsyncSession = Depends(get_db),
):
    asset = await AssetService(session, user, request).create_asset(**body.model_dump())
    return DataResponse(data=CreatedId(id=asset.id))


@router.post("/assign", response_model=DataResponse[AssignAssetsOut])
@fallback_message("Failed to assign assets")
async def assign_assets(
    body: AssignAssetsRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("assets.assign")),
    session: AsyncSession = Depends(get_db),
):
    count = await AssetService(session, user, request).assign_to_fm(body.asset_ids, body.fm_id, body.note)
    return DataResponse(data=AssignAssetsOut(assigned_count=count))


@router.post("/{asset_id}/retrieve", response_model=DataResponse[RetrieveAssetOut])
@fallback_message("Failed to retrieve asset")
async def retrieve_asset(
    asset_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("assets.retrieve")),
    session: AsyncSession = Depends(get_db),
):
    """Close the asset's open custody. Safe to repeat."""
    count = await AssetService(session, user, request).retrieve(asset_id)
    return DataResponse(data=RetrieveAssetOut(retrieved_count=count))
