from __future__ import annotations

from datetime import datetime
from typing import Any

from gridgas_admin.schemas.common import CamelModel


class GlobalPriceRequest(CamelModel):
    price_per_kg: Any = None
    uplift_first_n_kg_per_month: Any = None
    uplift_amount_per_kg: Any = None


class BuildingPriceRequest(CamelModel):
    building_ids: Any = None
    price_per_kg: Any = None


class TariffOut(CamelModel):
    id: int
    global_rate_per_kg: float
    uplift_first_n_kg_per_month: float
    uplift_amount_per_kg: float
    is_active: bool
    updated_at: datetime


class BuildingOverrideOut(CamelModel):
    id: str
    building_id: str
    rate_per_kg: float
    is_active: bool
    updated_at: datetime


class GlobalPriceOut(CamelModel):
    tariff: TariffOut
    message: str = "Global tariff updated successfully"


class BuildingPriceOut(CamelModel):
    overrides: list[BuildingOverrideOut]
    count: int
    message: str
