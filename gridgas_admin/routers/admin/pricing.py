from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.pricing import (
    BuildingOverrideOut,
    BuildingPriceOut,
    BuildingPriceRequest,
    GlobalPriceOut,
    GlobalPriceRequest,
    TariffOut,
)
from gridgas_admin.services.pricing import PricingService

router = APIRouter(prefix="/price-settings", tags=["Price settings"])


@router.post("/global", response_model=DataResponse[GlobalPriceOut])
@fallback_message("Failed to update global price")
async def update_global_price(
    body: GlobalPriceRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("price_settings.update_global")),
    session: AsyncSession = Depends(get_db),
):
    tariff = await PricingService(session, user, request).update_global(
        body.price_per_kg, body.uplift_first_n_kg_per_month, body.uplift_amount_per_kg
    )
    return DataResponse(data=GlobalPriceOut(tariff=TariffOut.model_validate(tariff)))


@router.post("/buildings", response_model=DataResponse[BuildingPriceOut])
@fallback_message("Failed to update building prices")
async def update_building_prices(
    body: BuildingPriceRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("price_settings.update_building")),
    session: AsyncSession = Depends(get_db),
):
    overrides = await PricingService(session, user, request).update_buildings(
        body.building_ids, body.price_per_kg
    )
    return DataResponse(
        data=BuildingPriceOut(
            overrides=[BuildingOverrideOut.model_validate(o) for o in overrides],
            count=len(overrides),
            message=f"Updated price for {len(overrides)} building(s)",
        )
    )
