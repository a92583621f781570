"""Authentication and role-based authorization dependencies.

Bearer tokens are issued by the hosted BaaS; this service only verifies them
by asking the BaaS who the token belongs to. Roles come from ``admin_roles``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import ForbiddenError, UnauthorizedError
from gridgas_admin.core.roles import has_feature, is_role
from gridgas_admin.db.base import get_db
from gridgas_admin.integrations.baas import BaasClient, BaasError, get_baas_client
from gridgas_admin.repositories.admin import AdminRoleRepository

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None = None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    baas: BaasClient = Depends(get_baas_client),
) -> AuthUser:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    try:
        payload = await baas.get_user(credentials.credentials)
    except BaasError as exc:
        logger.debug("Token rejected by auth service (status=%s)", exc.status_code)
        raise UnauthorizedError() from exc

    user_id = (payload or {}).get("id")
    if not user_id:
        raise UnauthorizedError()
    return AuthUser(id=str(user_id), email=payload.get("email"))


async def get_current_role(
    user: AuthUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> str | None:
    role = await AdminRoleRepository(session).get_role(user.id)
    return role if is_role(role) else None


def require_feature(feature: str) -> Callable[..., Awaitable[AuthUser]]:
    """Dependency factory: the caller must hold a role granting *feature*."""

    async def dependency(
        user: AuthUser = Depends(get_current_user),
        role: str | None = Depends(get_current_role),
    ) -> AuthUser:
        if not has_feature(role, feature):
            logger.info("Denied %s to user %s (role=%s)", feature, user.id, role)
            raise ForbiddenError()
        return user

    return dependency


async def require_super_admin(
    user: AuthUser = Depends(get_current_user),
    role: str | None = Depends(get_current_role),
) -> AuthUser:
    if role != "super_admin":
        raise ForbiddenError("Unauthorized")
    return user
