"""Console PIN gate, storage provisioning and app metadata."""

from datetime import datetime, timezone

import pytest

from gridgas_admin.core.config import settings
from gridgas_admin.services.app_info import get_app_info


async def test_pin_gate_disabled_when_unset(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_pin", "")
    resp = await client.post("/api/admin/pin/verify", json={"pin": "anything"}, headers={"Authorization": ""})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "disabled": True}


@pytest.mark.parametrize("pin", ["0000", "", None, 2468])
async def test_pin_mismatch_is_401(client, monkeypatch, pin):
    monkeypatch.setattr(settings, "admin_pin", "2468")
    resp = await client.post("/api/admin/pin/verify", json={"pin": pin}, headers={"Authorization": ""})
    assert resp.status_code == 401
    assert resp.json() == {"ok": False}


async def test_pin_gate_disabled_without_body(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_pin", "")
    resp = await client.post("/api/admin/pin/verify", headers={"Authorization": ""})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "disabled": True}


@pytest.mark.parametrize("content", [b"", b"{not json", b"[\"2468\"]", b"\xff\xfe"])
async def test_unreadable_pin_body_is_401(client, monkeypatch, content):
    monkeypatch.setattr(settings, "admin_pin", "2468")
    resp = await client.post(
        "/api/admin/pin/verify",
        content=content,
        headers={"Authorization": "", "Content-Type": "application/json"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"ok": False}


async def test_pin_match(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_pin", "2468")
    resp = await client.post("/api/admin/pin/verify", json={"pin": "2468"}, headers={"Authorization": ""})
    assert resp.json() == {"ok": True}


async def test_ensure_avatars_creates_missing_bucket(client, baas_stub):
    baas_stub.set("GET", "/storage/v1/bucket", 200, [{"name": "documents"}])
    baas_stub.set("POST", "/storage/v1/bucket", 200, {"name": "avatars"})

    resp = await client.post("/api/admin/storage/ensure-avatars")

    assert resp.json()["data"] == {"ok": True, "bucket": "avatars", "created": True}
    [payload] = baas_stub.calls_to("POST", "/storage/v1/bucket")
    assert payload["public"] is True
    assert payload["file_size_limit"] == "5MB"
    assert payload["allowed_mime_types"] == ["image/jpeg", "image/png", "image/webp", "image/gif"]


async def test_ensure_avatars_is_noop_when_present(client, baas_stub):
    baas_stub.set("GET", "/storage/v1/bucket", 200, [{"name": "avatars"}])
    resp = await client.post("/api/admin/storage/ensure-avatars")
    assert resp.json()["data"]["created"] is False
    assert baas_stub.calls_to("POST", "/storage/v1/bucket") == []


def test_app_info_fallbacks():
    info = get_app_info("definitely-not-an-installed-distribution")
    year = datetime.now(timezone.utc).year
    assert info == {"name": "GridGas Board", "version": "0.0.0", "copyright": f"© {year} GridGas"}


async def test_app_info_endpoint_needs_no_auth(client):
    resp = await client.get("/api/admin/app-info", headers={"Authorization": ""})
    assert resp.status_code == 200
    assert set(resp.json()["data"]) == {"name", "version", "copyright"}
