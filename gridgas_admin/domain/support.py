"""SQLAlchemy ORM models for support tickets and their message threads."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gridgas_admin.db.base import Base
from gridgas_admin.domain.mixins import CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin


class SupportTicket(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "support_tickets"

    # Human-facing reference, e.g. "TKT-000123"
    ticket_id: Mapped[Optional[str]] = mapped_column(String(50), index=True, nullable=True)
    subject: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # "open" | "in_progress" | "escalated" | "resolved" | "closed"
    status: Mapped[str] = mapped_column(String(50), default="open", nullable=False, index=True)
    priority: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    tenant_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    fm_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    escalated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    escalation_reason: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    closed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    resolution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class SupportTicketMessage(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "support_ticket_messages"

    ticket_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("support_tickets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "tenant" | "fm" | "admin"
    sender_type: Mapped[str] = mapped_column(String(20), nullable=False)
    sender_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_internal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
