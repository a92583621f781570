"""Console staff management (super admin only).

Staff accounts live in the BaaS auth service; this module creates/updates them
through the auth admin API and keeps the local role / PIN rows in step.
"""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Any

import bcrypt
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import BadRequestError, ForbiddenError
from gridgas_admin.core.roles import is_role
from gridgas_admin.core.security import AuthUser
from gridgas_admin.integrations.baas import BaasClient, BaasError
from gridgas_admin.repositories.admin import (
    AdminPinRepository,
    AdminPreferencesRepository,
    AdminRoleRepository,
)
from gridgas_admin.services.audit import AuditTrail

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 8
# Effectively permanent ban, as understood by the auth admin API
SUSPEND_BAN_DURATION = "876000h"


def hash_pin(pin: str) -> str:
    return bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def generate_temporary_password() -> str:
    return secrets.token_urlsafe(12)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class CreatedAdmin:
    admin_id: str
    temporary_password: str | None


@dataclass
class AdminUpdate:
    updated: dict = field(default_factory=dict)
    temporary_password: str | None = None


class AdminService:
    def __init__(
        self,
        session: AsyncSession,
        baas: BaasClient,
        actor: AuthUser,
        request: Request | None = None,
    ):
        self._baas = baas
        self._actor = actor
        self._audit = AuditTrail(session, request, actor)
        self._roles = AdminRoleRepository(session)
        self._pins = AdminPinRepository(session)
        self._prefs = AdminPreferencesRepository(session)

    async def create_admin(
        self,
        email: Any,
        full_name: Any,
        role: Any,
        password: Any = None,
        pin: Any = None,
    ) -> CreatedAdmin:
        email, full_name, role = _clean(email), _clean(full_name), _clean(role)
        if not email:
            raise BadRequestError("Email is required")
        if not full_name:
            raise BadRequestError("Full name is required")
        if not role:
            raise BadRequestError("Role is required")
        if not is_role(role):
            raise BadRequestError("Invalid role")

        generated = None
        effective_password = _clean(password)
        if effective_password:
            if len(effective_password) < MIN_PASSWORD_LENGTH:
                raise BadRequestError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        else:
            generated = effective_password = generate_temporary_password()

        user = await self._baas.create_user(
            email,
            effective_password,
            email_confirm=True,
            user_metadata={"full_name": full_name},
        )

        admin_id = str(user["id"])
        await self._roles.create(user_id=admin_id, role=role, assigned_by=self._actor.id)
        has_pin = bool(_clean(pin))
        if has_pin:
            await self._pins.create(user_id=admin_id, pin_hash=hash_pin(_clean(pin)), granted_by=self._actor.id)

        await self._audit.record(
            "created_admin",
            "admin_user",
            admin_id,
            new_value={"email": email, "role": role, "has_pin": has_pin},
            metadata={"email": email, "role": role},
        )
        logger.info("Admin %s created %s admin %s", self._actor.id, role, admin_id)
        return CreatedAdmin(admin_id=admin_id, temporary_password=generated)

    async def update_admin(
        self,
        admin_id: str,
        full_name: Any = None,
        suspended: Any = None,
        remove_passworded_access: Any = False,
        force_reset_password: Any = False,
    ) -> AdminUpdate:
        admin_id = (admin_id or "").strip()
        if not admin_id:
            raise BadRequestError("Missing admin id")

        full_name = full_name.strip() if isinstance(full_name, str) else None
        suspended = suspended if isinstance(suspended, bool) else None
        remove_access = remove_passworded_access is True
        force_reset = force_reset_password is True

        if await self._roles.get_role(admin_id) == "super_admin":
            if suspended is True:
                raise BadRequestError("Cannot suspend a super admin")
            if remove_access:
                raise BadRequestError("Cannot remove passworded access for a super admin")
            if force_reset:
                raise BadRequestError("Cannot force-reset password for a super admin")

        target = await self._baas.get_user_by_id(admin_id)
        user_metadata = dict(target.get("user_metadata") or {})
        old_value = {"full_name": user_metadata.get("full_name"), "banned_until": target.get("banned_until")}

        result = AdminUpdate()
        if full_name is not None:
            await self._baas.update_user_by_id(
                admin_id, {"user_metadata": {**user_metadata, "full_name": full_name}}
            )
            result.updated["full_name"] = full_name

        if suspended is not None:
            await self._baas.update_user_by_id(
                admin_id, {"ban_duration": SUSPEND_BAN_DURATION if suspended else "none"}
            )
            result.updated["suspended"] = suspended

        if remove_access:
            await self._pins.delete(admin_id)
            result.updated["passworded_access"] = False

        if force_reset:
            result.temporary_password = generate_temporary_password()
            await self._baas.update_user_by_id(admin_id, {"password": result.temporary_password})
            result.updated["force_reset_password"] = True

        await self._audit.record(
            "updated_admin", "admin_user", admin_id, old_value=old_value, new_value=result.updated
        )
        return result

    async def change_role(self, admin_id: str, role: Any) -> None:
        if not is_role(role):
            raise BadRequestError("Invalid role")

        old_role = await self._roles.get_role(admin_id)
        await self._roles.set_role(admin_id, role, self._actor.id)
        await self._audit.record(
            "updated_admin_role",
            "admin_roles",
            admin_id,
            old_value={"role": old_role},
            new_value={"role": role},
            metadata={"admin_id": admin_id},
        )

    async def set_pin(self, admin_id: str, pin: Any) -> None:
        pin = _clean(pin)
        if not pin:
            raise BadRequestError("PIN is required")

        await self._pins.upsert(admin_id, hash_pin(pin), self._actor.id)
        await self._audit.record(
            "set_admin_pin",
            "admin_passworded_access",
            admin_id,
            new_value={"has_pin": True},
            metadata={"admin_id": admin_id},
        )

    async def delete_admin(self, admin_id: str) -> None:
        if await self._roles.get_role(admin_id) == "super_admin":
            raise ForbiddenError("Cannot delete super admin")

        try:
            target = await self._baas.get_user_by_id(admin_id)
        except BaasError:
            target = {}
        await self._baas.delete_user(admin_id)

        await self._roles.delete(admin_id)
        await self._pins.delete(admin_id)
        await self._prefs.delete(admin_id)

        await self._audit.record(
            "deleted_admin",
            "admin_user",
            admin_id,
            old_value={"email": target.get("email")},
            metadata={"admin_id": admin_id},
        )
