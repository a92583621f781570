from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select

from gridgas_admin.domain.support import SupportTicket, SupportTicketMessage
from gridgas_admin.repositories.base import BaseRepository


class SupportTicketRepository(BaseRepository[SupportTicket]):
    model = SupportTicket

    async def stale_ids(
        self, statuses: Sequence[str], updated_before: datetime, limit: int
    ) -> list[str]:
        """Ids of tickets in *statuses* last touched at or before *updated_before*, oldest first."""
        stmt = (
            select(SupportTicket.id)
            .where(
                SupportTicket.status.in_(list(statuses)),
                SupportTicket.updated_at <= updated_before,
            )
            .order_by(SupportTicket.updated_at.asc())
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())


class SupportMessageRepository(BaseRepository[SupportTicketMessage]):
    model = SupportTicketMessage
