"""Console roles and the role -> feature permission matrix."""

from __future__ import annotations

from typing import Any, Literal

Role = Literal["super_admin", "admin", "support", "fm_viewer"]

ROLES: tuple[str, ...] = ("super_admin", "admin", "support", "fm_viewer")

_SETTINGS_SELF = ("settings.profile", "settings.preferences", "settings.appearance")
_SUPPORT_ALL = (
    "support.view",
    "support.reply",
    "support.escalate",
    "support.close",
    "support.reassign",
)
_OPERATIONS = (
    "dashboard",
    "assets.view", "assets.create", "assets.assign", "assets.retrieve",
    "fms.view", "fms.block", "fms.lock_meters",
    "customers.view", "customers.lock_meter", "customers.reassign_fm",
    "buildings.view",
    "vendors.view", "vendors.create",
    "deliveries.create",
    "map.view",
)

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    "super_admin": frozenset(
        _OPERATIONS
        + ("price_settings.view", "price_settings.update_global", "price_settings.update_building")
        + ("vend.manual",)
        + _SUPPORT_ALL
        + _SETTINGS_SELF
        + ("settings.admin_users", "audit.view", "audit.export")
    ),
    # No price settings, vend or support
    "admin": frozenset(_OPERATIONS + _SETTINGS_SELF + ("audit.view",)),
    "support": frozenset(
        ("dashboard", "customers.view", "fms.view", "buildings.view")
        + _SUPPORT_ALL
        + _SETTINGS_SELF
        + ("audit.view",)
    ),
    # Read-only
    "fm_viewer": frozenset(
        ("dashboard", "fms.view", "customers.view", "buildings.view", "vendors.view", "map.view")
        + _SETTINGS_SELF
    ),
}


def is_role(value: Any) -> bool:
    return isinstance(value, str) and value in ROLES


def has_feature(role: str | None, feature: str) -> bool:
    if not is_role(role):
        return False
    return feature in ROLE_PERMISSIONS[role]
