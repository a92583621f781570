"""Global and per-building gas tariff updates."""

from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError
from gridgas_admin.core.numbers import parse_non_negative, parse_positive_price
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.tariff import BuildingTariffOverride, TariffSetting
from gridgas_admin.repositories.building import BuildingRepository
from gridgas_admin.repositories.tariff import BuildingOverrideRepository, TariffRepository
from gridgas_admin.services.audit import AuditTrail, row_snapshot


def normalize_building_ids(value: Any) -> list[str]:
    if not isinstance(value, list) or not value:
        raise BadRequestError("Select at least one building.")
    ids = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    if not ids:
        raise BadRequestError("Invalid building IDs.")
    # Keep first occurrence order; one override per building
    return list(dict.fromkeys(ids))


class PricingService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._audit = AuditTrail(session, request, actor)
        self._tariffs = TariffRepository(session)
        self._overrides = BuildingOverrideRepository(session)
        self._buildings = BuildingRepository(session)

    async def update_global(
        self,
        price_per_kg: Any,
        uplift_first_n_kg_per_month: Any = None,
        uplift_amount_per_kg: Any = None,
    ) -> TariffSetting:
        price = parse_positive_price(price_per_kg)
        uplift_n = parse_non_negative(uplift_first_n_kg_per_month, "Uplift first N kg per month")
        uplift_amount = parse_non_negative(uplift_amount_per_kg, "Uplift amount per kg")

        old = row_snapshot(await self._tariffs.get_global())
        tariff = await self._tariffs.upsert_global(
            global_rate_per_kg=price,
            uplift_first_n_kg_per_month=uplift_n,
            uplift_amount_per_kg=uplift_amount,
        )

        await self._audit.record(
            "updated_tariff",
            "tariff_settings",
            str(tariff.id),
            old_value=old,
            new_value=row_snapshot(tariff),
            metadata={
                "scope": "global",
                "pricePerKg": price,
                "upliftFirstNKgPerMonth": uplift_n,
                "upliftAmountPerKg": uplift_amount,
            },
        )
        return tariff

    async def update_buildings(self, building_ids: Any, price_per_kg: Any) -> list[BuildingTariffOverride]:
        ids = normalize_building_ids(building_ids)
        price = parse_positive_price(price_per_kg)

        old_rows = [row_snapshot(await self._overrides.get_for_building(bid)) for bid in ids]
        buildings = await self._buildings.get_many(ids)
        labels = [
            {"id": b.id, "label": (b.address or b.name or b.id).strip() or b.id}
            for b in buildings
        ]

        overrides = [await self._overrides.upsert(bid, price) for bid in ids]

        await self._audit.record(
            "updated_tariff",
            "building_tariff_overrides",
            None,
            old_value=[r for r in old_rows if r is not None],
            new_value=[row_snapshot(r) for r in overrides],
            metadata={
                "scope": "buildings",
                "buildingIds": ids,
                "buildingLabels": labels,
                "pricePerKg": price,
            },
        )
        return overrides
