"""Authentication and role gating across the console API."""

from gridgas_admin.core.sanitize import ErrorMessages


async def test_missing_bearer_is_401(client):
    resp = await client.post("/api/admin/vend/manual", json={}, headers={"Authorization": ""})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}


async def test_rejected_token_is_401(client):
    resp = await client.get("/api/admin/me/role", headers={"Authorization": "Bearer expired"})
    assert resp.status_code == 401


async def test_role_without_feature_is_403(client, set_role):
    await set_role("admin")
    resp = await client.post("/api/admin/vend/manual", json={"meterId": "m1", "amountNaira": 3000})
    assert resp.status_code == 403
    assert resp.json()["error"] == ErrorMessages.FORBIDDEN


async def test_no_role_row_is_403(client, set_role):
    await set_role(None)
    resp = await client.get("/api/admin/buildings")
    assert resp.status_code == 403


async def test_super_admin_routes_reject_other_roles(client, set_role):
    await set_role("support")
    resp = await client.post("/api/admin/settings/admins/create", json={"email": "x@y.z"})
    assert resp.status_code == 403
    assert resp.json()["error"] == "Unauthorized"


async def test_me_role(client, set_role):
    resp = await client.get("/api/admin/me/role")
    assert resp.json() == {"data": {"role": "super_admin"}}

    await set_role(None)
    resp = await client.get("/api/admin/me/role")
    assert resp.json() == {"data": {"role": None}}


async def test_health_needs_no_auth(client):
    resp = await client.get("/health", headers={"Authorization": ""})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
