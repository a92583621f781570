from __future__ import annotations

from gridgas_admin.domain.audit import AdminAuditLog
from gridgas_admin.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AdminAuditLog]):
    """Insert-only; audit rows are never updated or deleted."""

    model = AdminAuditLog
