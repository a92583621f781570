"""Manual vend: staff-initiated gas purchase pushed straight to a meter.

Flow (linear, no retries):
  1. Validate input and the meter (exists, has a tenant, not locked)
  2. Resolve the tariff: building override -> global tariff -> configured default
  3. Convert naira to kg and bound-check it
  4. Record the purchase + audit row and COMMIT
  5. Generate a vend token, then send it to the meter (two edge functions)

The purchase is committed before step 5 so a downstream failure leaves it in
``token_pending`` for reconciliation instead of rolling it back.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.config import settings
from gridgas_admin.core.exceptions import (
    BadRequestError,
    InternalError,
    NotFoundError,
    UpstreamServiceError,
)
from gridgas_admin.core.numbers import format_number, is_finite, round_half_up, to_number
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.meter import Meter
from gridgas_admin.domain.purchase import GasPurchase
from gridgas_admin.integrations.baas import BaasClient, BaasError
from gridgas_admin.repositories.meter import MeterRepository
from gridgas_admin.repositories.people import TenantRepository
from gridgas_admin.repositories.purchase import PurchaseRepository
from gridgas_admin.repositories.tariff import BuildingOverrideRepository, TariffRepository
from gridgas_admin.services.audit import AuditTrail

logger = logging.getLogger(__name__)


@dataclass
class ManualVendOutcome:
    purchase: GasPurchase
    token: str | None
    sent: Any
    message: str


class VendService:
    def __init__(
        self,
        session: AsyncSession,
        baas: BaasClient,
        actor: AuthUser,
        request: Request | None = None,
    ):
        self._session = session
        self._baas = baas
        self._actor = actor
        self._audit = AuditTrail(session, request, actor)
        self._meters = MeterRepository(session)
        self._tenants = TenantRepository(session)
        self._purchases = PurchaseRepository(session)
        self._tariffs = TariffRepository(session)
        self._overrides = BuildingOverrideRepository(session)

    # ------------------------------------------------------------------
    # Tariff
    # ------------------------------------------------------------------

    async def resolve_rate(self, building_id: str | None) -> float:
        """Rate per kg for a building: active override, else active global, else default."""
        if building_id:
            override = await self._overrides.latest_active_for_building(building_id)
            if override is not None:
                return to_number(override.rate_per_kg)  # type: ignore[return-value]

        tariff = await self._tariffs.latest_active()
        if tariff is not None:
            return to_number(tariff.global_rate_per_kg)  # type: ignore[return-value]

        return settings.default_rate_per_kg

    # ------------------------------------------------------------------
    # Manual vend
    # ------------------------------------------------------------------

    async def _load_vendable_meter(self, meter_id: str) -> Meter:
        meter = await self._meters.get_by_id(meter_id)
        if meter is None:
            raise NotFoundError("Meter not found")

        tenant = await self._tenants.get_by_id(meter.tenant_id) if meter.tenant_id else None
        if tenant is None:
            raise BadRequestError("Meter has no assigned tenant")

        if meter.status == "locked":
            raise BadRequestError("Meter is locked")
        return meter

    async def manual_vend(self, meter_id: Any, amount_naira: Any, note: str | None = None) -> ManualVendOutcome:
        if not meter_id or not isinstance(meter_id, str):
            raise BadRequestError("meterId is required")

        amount = to_number(amount_naira)
        if not is_finite(amount) or amount <= 0 or amount > settings.vend_max_amount_naira:
            raise BadRequestError("Valid amountNaira is required")

        meter = await self._load_vendable_meter(meter_id)

        rate = await self.resolve_rate(meter.building_id)
        if not is_finite(rate) or rate <= 0:
            raise InternalError("Tariff rate is invalid")

        kg = round_half_up(amount / rate, 3)
        if not is_finite(kg) or kg < settings.vend_min_kg or kg > settings.vend_max_kg:
            raise BadRequestError("Calculated kg is invalid")

        purchase = await self._purchases.create(
            tenant_id=meter.tenant_id,
            meter_id=meter.id,
            building_id=meter.building_id,
            kg=kg,
            amount_naira=amount,
            rate_per_kg=rate,
            currency="NGN",
            status="token_pending",
            idempotency_key=f"admin_manual:{self._actor.id}:{int(time.time() * 1000)}",
            meta={
                "source": "admin_manual",
                "admin_user_id": self._actor.id,
                "admin_note": note or None,
            },
        )

        await self._audit.record(
            "vended_gas",
            "gas_purchases",
            purchase.id,
            new_value={
                "purchase_id": purchase.id,
                "meter_id": meter.id,
                "tenant_id": meter.tenant_id,
                "building_id": meter.building_id,
                "kg": kg,
                "amount_naira": amount,
                "rate_per_kg": rate,
                "note": note or None,
            },
            metadata={"source": "admin_manual"},
        )

        # Downstream failures must not undo the purchase record
        await self._session.commit()

        try:
            token_result = await self._baas.invoke_function(
                settings.vend_token_function,
                {"purchase_id": purchase.id, "meter_id": meter.id, "kg": kg},
            )
        except BaasError as exc:
            logger.error("Token generation failed for purchase %s: %s", purchase.id, exc.body[:500])
            raise UpstreamServiceError("Token generation failed") from exc

        token_result = token_result if isinstance(token_result, dict) else {}
        token = token_result.get("token") or token_result.get("vend_token")

        try:
            sent = await self._baas.invoke_function(
                settings.vend_send_function,
                {"meter_id": meter.id, "purchase_id": purchase.id, "vend_token": token, "kg": kg},
            )
        except BaasError as exc:
            logger.error("Send vend failed for purchase %s: %s", purchase.id, exc.body[:500])
            raise UpstreamServiceError("Send vend command failed") from exc

        logger.info(
            "Manual vend %s: %skg to meter %s by admin %s",
            purchase.id, kg, meter.meter_number, self._actor.id,
        )
        return ManualVendOutcome(
            purchase=purchase,
            token=token,
            sent=sent,
            message=(
                f"Vend initiated: {format_number(kg)}kg (₦{format_number(amount)}) "
                f"to meter {meter.meter_number}"
            ),
        )
