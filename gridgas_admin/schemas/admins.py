"""Console staff management schemas. Inputs accept snake_case or camelCase keys."""

from __future__ import annotations

from typing import Any

from gridgas_admin.schemas.common import CamelModel


class AdminCreateRequest(CamelModel):
    email: Any = None
    full_name: Any = None
    role: Any = None
    password: Any = None
    pin: Any = None


class AdminCreatedOut(CamelModel):
    success: bool = True
    admin_id: str
    temporary_password: str | None = None


class AdminUpdateRequest(CamelModel):
    full_name: Any = None
    suspended: Any = None
    remove_passworded_access: Any = False
    force_reset_password: Any = False


class AdminUpdatedOut(CamelModel):
    success: bool = True
    updated: dict[str, Any]
    temporary_password: str | None = None


class AdminRoleRequest(CamelModel):
    role: Any = None


class AdminPinRequest(CamelModel):
    pin: Any = None
