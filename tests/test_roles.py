import pytest

from gridgas_admin.core.roles import ROLE_PERMISSIONS, ROLES, has_feature, is_role


def test_super_admin_holds_every_feature():
    everything = set().union(*ROLE_PERMISSIONS.values())
    assert everything <= ROLE_PERMISSIONS["super_admin"]


@pytest.mark.parametrize(
    ("role", "feature", "allowed"),
    [
        ("super_admin", "vend.manual", True),
        ("super_admin", "settings.admin_users", True),
        ("admin", "vend.manual", False),
        ("admin", "price_settings.update_global", False),
        ("admin", "assets.assign", True),
        ("admin", "support.reply", False),
        ("support", "support.reply", True),
        ("support", "customers.lock_meter", False),
        ("fm_viewer", "map.view", True),
        ("fm_viewer", "vendors.create", False),
        ("fm_viewer", "audit.view", False),
    ],
)
def test_permission_matrix(role, feature, allowed):
    assert has_feature(role, feature) is allowed


def test_unknown_roles_have_no_features():
    assert not has_feature(None, "dashboard")
    assert not has_feature("owner", "dashboard")
    assert not is_role("owner")
    assert all(is_role(r) for r in ROLES)
