"""Support ticket actions taken from the console, plus retention cleanup."""

import calendar
import logging
from datetime import datetime
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, NotFoundError
from gridgas_admin.core.security import AuthUser
from gridgas_admin.domain.support import SupportTicket, SupportTicketMessage
from gridgas_admin.repositories.base import utcnow
from gridgas_admin.repositories.support import SupportMessageRepository, SupportTicketRepository
from gridgas_admin.services.audit import AuditTrail

logger = logging.getLogger(__name__)

ESCALATION_REASON = "MANUAL_ADMIN_ESCALATION"
DEFAULT_RESOLUTION = "Closed by admin"
RETENTION_MONTHS = 6
CLEANUP_MAX_TICKETS = 5000
CLEANUP_CHUNK_SIZE = 500
PREVIEW_CHARS = 200


def months_before(when: datetime, months: int) -> datetime:
    """Same day-of-month *months* earlier, clamped to the target month's length."""
    month_index = when.month - 1 - months
    year = when.year + month_index // 12
    month = month_index % 12 + 1
    day = min(when.day, calendar.monthrange(year, month)[1])
    return when.replace(year=year, month=month, day=day)


class SupportService:
    def __init__(self, session: AsyncSession, actor: AuthUser, request: Request | None = None):
        self._actor = actor
        self._audit = AuditTrail(session, request, actor)
        self._tickets = SupportTicketRepository(session)
        self._messages = SupportMessageRepository(session)

    async def _require_ticket(self, ticket_id: str) -> SupportTicket:
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket

    async def reply(self, ticket_id: str, message: Any, is_internal: Any = False) -> SupportTicketMessage:
        if not isinstance(message, str) or not message.strip():
            raise BadRequestError("Message is required")
        text = message.strip()
        internal = bool(is_internal)

        await self._require_ticket(ticket_id)
        reply = await self._messages.create(
            ticket_id=ticket_id,
            sender_type="admin",
            sender_id=self._actor.id,
            message=text,
            is_internal=internal,
        )
        await self._tickets.update(ticket_id)  # bump updated_at

        await self._audit.record(
            "support_reply",
            "support_tickets",
            ticket_id,
            new_value={"message_preview": text[:PREVIEW_CHARS], "is_internal": internal},
            metadata={"message_length": len(text)},
        )
        return reply

    async def escalate(self, ticket_id: str) -> SupportTicket:
        await self._require_ticket(ticket_id)
        ticket = await self._tickets.update(
            ticket_id,
            status="escalated",
            escalated_at=utcnow(),
            escalation_reason=ESCALATION_REASON,
        )
        await self._audit.record(
            "support_escalate",
            "support_tickets",
            ticket_id,
            new_value={"status": "escalated", "escalation_reason": ESCALATION_REASON},
        )
        return ticket  # type: ignore[return-value]

    async def close(self, ticket_id: str, resolution: str | None = None) -> SupportTicket:
        await self._require_ticket(ticket_id)
        resolution = resolution or DEFAULT_RESOLUTION
        ticket = await self._tickets.update(
            ticket_id,
            status="closed",
            closed_at=utcnow(),
            resolution=resolution,
        )
        await self._audit.record(
            "support_close",
            "support_tickets",
            ticket_id,
            new_value={"status": "closed", "resolution": resolution},
        )
        return ticket  # type: ignore[return-value]

    async def reassign(self, ticket_id: str, fm_id: Any) -> SupportTicket:
        if not fm_id or not isinstance(fm_id, str):
            raise BadRequestError("fmId is required")

        await self._require_ticket(ticket_id)
        ticket = await self._tickets.update(ticket_id, fm_id=fm_id)
        await self._audit.record(
            "support_reassign",
            "support_tickets",
            ticket_id,
            new_value={"fm_id": fm_id},
        )
        return ticket  # type: ignore[return-value]

    async def cleanup_closed(self, now: datetime | None = None) -> tuple[int, datetime]:
        """Delete closed/resolved tickets idle for six months. Returns (deleted, cutoff)."""
        cutoff = months_before(now or utcnow(), RETENTION_MONTHS)
        ids = await self._tickets.stale_ids(("closed", "resolved"), cutoff, CLEANUP_MAX_TICKETS)

        deleted = 0
        for start in range(0, len(ids), CLEANUP_CHUNK_SIZE):
            chunk = ids[start:start + CLEANUP_CHUNK_SIZE]
            await self._tickets.delete_many(chunk)
            deleted += len(chunk)

        logger.info("Support cleanup removed %d ticket(s) older than %s", deleted, cutoff.isoformat())
        await self._audit.record(
            "support_cleanup_old_closed",
            "support_tickets",
            None,
            new_value={"deleted_count": deleted},
            metadata={"cutoff": cutoff.isoformat()},
        )
        return deleted, cutoff
