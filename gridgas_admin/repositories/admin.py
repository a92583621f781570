"""Repositories for console staff tables keyed by BaaS auth user id."""

from __future__ import annotations

from gridgas_admin.domain.admin import AdminPasswordedAccess, AdminRole, AdminUserPreferences
from gridgas_admin.repositories.base import BaseRepository


class AdminRoleRepository(BaseRepository[AdminRole]):
    model = AdminRole
    pk = "user_id"

    async def get_role(self, user_id: str) -> str | None:
        row = await self.get_by_id(user_id)
        return row.role if row else None

    async def set_role(self, user_id: str, role: str, assigned_by: str | None) -> AdminRole:
        row = await self.get_by_id(user_id)
        if row is None:
            return await self.create(user_id=user_id, role=role, assigned_by=assigned_by)
        return await self.update(user_id, role=role, assigned_by=assigned_by)  # type: ignore[return-value]


class AdminPinRepository(BaseRepository[AdminPasswordedAccess]):
    model = AdminPasswordedAccess
    pk = "user_id"

    async def upsert(self, user_id: str, pin_hash: str, granted_by: str | None) -> AdminPasswordedAccess:
        row = await self.get_by_id(user_id)
        if row is None:
            return await self.create(user_id=user_id, pin_hash=pin_hash, granted_by=granted_by)
        return await self.update(user_id, pin_hash=pin_hash, granted_by=granted_by)  # type: ignore[return-value]


class AdminPreferencesRepository(BaseRepository[AdminUserPreferences]):
    model = AdminUserPreferences
    pk = "user_id"
