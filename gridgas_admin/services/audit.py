"""Admin audit trail: one ``admin_audit_log`` row per console mutation.

Audit inserts run inside a SAVEPOINT so a failed insert is rolled back on its
own and never takes the caller's business write (or the response) with it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from fastapi import Request
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.security import AuthUser
from gridgas_admin.repositories.audit import AuditLogRepository

logger = logging.getLogger(__name__)


def client_ip(request: Request | None) -> str | None:
    """First ``x-forwarded-for`` hop, else ``x-real-ip``."""
    if request is None:
        return None
    raw = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    if not raw:
        return None
    return raw.split(",")[0].strip() or None


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def row_snapshot(instance: Any) -> dict[str, Any] | None:
    """Column values of an ORM row as a JSON-safe dict (keyed by column name)."""
    if instance is None:
        return None
    mapper = sa_inspect(instance).mapper
    return {
        attr.columns[0].name: _json_safe(getattr(instance, attr.key))
        for attr in mapper.column_attrs
    }


async def record_admin_action(
    session: AsyncSession,
    request: Request | None,
    actor: AuthUser,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    old_value: Any = None,
    new_value: Any = None,
    metadata: Any = None,
) -> None:
    """Insert an audit row. Failures are logged and never raised."""
    user_agent = request.headers.get("user-agent") if request is not None else None
    try:
        async with session.begin_nested():
            await AuditLogRepository(session).create(
                user_id=actor.id,
                user_email=actor.email,
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id is not None else None,
                old_value=_json_safe(old_value),
                new_value=_json_safe(new_value),
                meta=_json_safe(metadata),
                ip_address=client_ip(request),
                user_agent=user_agent,
            )
    except Exception:
        logger.exception("Failed to write audit row %s %s/%s", action, entity_type, entity_id)


class AuditTrail:
    """Binds the session, request and acting admin so services can audit in one call."""

    def __init__(self, session: AsyncSession, request: Request | None, actor: AuthUser):
        self._session = session
        self._request = request
        self._actor = actor

    @property
    def actor(self) -> AuthUser:
        return self._actor

    async def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None = None,
        *,
        old_value: Any = None,
        new_value: Any = None,
        metadata: Any = None,
    ) -> None:
        await record_admin_action(
            self._session,
            self._request,
            self._actor,
            action,
            entity_type,
            entity_id,
            old_value=old_value,
            new_value=new_value,
            metadata=metadata,
        )
