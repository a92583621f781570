"""Gas vendor onboarding and delivery endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.common import CreatedId, SuccessOut
from gridgas_admin.schemas.vendors import (
    DeliveryCreate,
    GasVendorCreate,
    GasVendorOut,
    VendorApproveRequest,
    VendorDetailOut,
    VendorPlantOut,
    VendorPriceOut,
    VendorProfileOut,
    VendorRejectRequest,
)
from gridgas_admin.services.vendors import VendorService

router = APIRouter(tags=["Gas vendors"])


@router.post("/gas-vendors", response_model=DataResponse[CreatedId], status_code=status.HTTP_201_CREATED)
@fallback_message("Failed to create vendor")
async def create_vendor(
    body: GasVendorCreate,
    request: Request,
    user: AuthUser = Depends(require_feature("vendors.create")),
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session, user, request).create_vendor(
        body.name, body.plant_location, body.capacity_kg, body.active
    )
    return DataResponse(data=CreatedId(id=vendor.id))


@router.post("/gas-vendors/approve", response_model=DataResponse[SuccessOut])
@fallback_message("Failed to approve vendor")
async def approve_vendor(
    body: VendorApproveRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("vendors.create")),
    session: AsyncSession = Depends(get_db),
):
    await VendorService(session, user, request).approve(body.vendor_id, body.profile_id, body.lat, body.lng)
    return DataResponse(data=SuccessOut())


@router.post("/gas-vendors/reject", response_model=DataResponse[SuccessOut])
@fallback_message("Failed to reject vendor")
async def reject_vendor(
    body: VendorRejectRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("vendors.create")),
    session: AsyncSession = Depends(get_db),
):
    await VendorService(session, user, request).reject(body.profile_id)
    return DataResponse(data=SuccessOut())


@router.get("/gas-vendors/{vendor_id}", response_model=DataResponse[VendorDetailOut])
@fallback_message("Failed to load vendor")
async def get_vendor(
    vendor_id: str,
    user: AuthUser = Depends(require_feature("vendors.view")),
    session: AsyncSession = Depends(get_db),
):
    detail = await VendorService(session, user).get_detail(vendor_id)
    return DataResponse(
        data=VendorDetailOut(
            vendor=GasVendorOut.model_validate(detail.vendor),
            profile=VendorProfileOut.model_validate(detail.profile) if detail.profile else None,
            current_price=VendorPriceOut.model_validate(detail.current_price) if detail.current_price else None,
            price_history=[VendorPriceOut.model_validate(p) for p in detail.price_history],
            plants=[VendorPlantOut.model_validate(p) for p in detail.plants],
        )
    )


@router.post("/vendor-deliveries", response_model=DataResponse[CreatedId], status_code=status.HTTP_201_CREATED)
@fallback_message("Failed to create delivery")
async def create_delivery(
    body: DeliveryCreate,
    request: Request,
    user: AuthUser = Depends(require_feature("deliveries.create")),
    session: AsyncSession = Depends(get_db),
):
    delivery = await VendorService(session, user, request).create_delivery(**body.model_dump())
    return DataResponse(data=CreatedId(id=delivery.id))
