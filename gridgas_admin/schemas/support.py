from __future__ import annotations

from datetime import datetime
from typing import Any

from gridgas_admin.schemas.common import CamelModel


class ReplyRequest(CamelModel):
    message: Any = None
    is_internal: Any = False


class CloseTicketRequest(CamelModel):
    resolution: str | None = None


class ReassignTicketRequest(CamelModel):
    fm_id: Any = None


class TicketOut(CamelModel):
    id: str
    ticket_id: str | None = None
    subject: str | None = None
    status: str
    priority: str | None = None
    tenant_id: str | None = None
    fm_id: str | None = None
    escalated_at: datetime | None = None
    escalation_reason: str | None = None
    closed_at: datetime | None = None
    resolution: str | None = None
    updated_at: datetime


class TicketMessageOut(CamelModel):
    id: str
    ticket_id: str
    sender_type: str
    sender_id: str | None = None
    message: str
    is_internal: bool
    created_at: datetime


class CleanupOut(CamelModel):
    deleted_count: int
    cutoff: datetime
