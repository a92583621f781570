"""Purchase, vend and wallet history queries for the customer detail screen."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select

from gridgas_admin.domain.purchase import GasPurchase, MeterVend, WalletBalance, WalletTransaction
from gridgas_admin.repositories.base import BaseRepository


class PurchaseRepository(BaseRepository[GasPurchase]):
    model = GasPurchase


class MeterVendRepository(BaseRepository[MeterVend]):
    model = MeterVend

    async def recent_for_purchases(self, purchase_ids: Sequence[str], limit: int = 20) -> list[MeterVend]:
        if not purchase_ids:
            return []
        stmt = (
            select(MeterVend)
            .where(MeterVend.purchase_id.in_(list(purchase_ids)))
            .order_by(MeterVend.created_at.desc())
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())


class WalletBalanceRepository(BaseRepository[WalletBalance]):
    model = WalletBalance
    pk = "user_id"


class WalletTransactionRepository(BaseRepository[WalletTransaction]):
    model = WalletTransaction
