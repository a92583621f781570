"""Tests for the BaaS HTTP wrapper."""

import httpx
import pytest

from gridgas_admin.core.config import settings
from gridgas_admin.integrations.baas import BaasClient, BaasError


def _client(handler) -> BaasClient:
    return BaasClient("http://baas.test/", "anon", "user-jwt", transport=httpx.MockTransport(handler))


async def test_sends_key_and_bearer_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"id": "u1"})

    assert await _client(handler).get_user() == {"id": "u1"}
    assert seen["apikey"] == "anon"
    assert seen["authorization"] == "Bearer user-jwt"
    assert seen["url"] == "http://baas.test/auth/v1/user"


async def test_error_carries_upstream_message():
    def handler(request):
        return httpx.Response(422, json={"msg": "A user with this email address has already been registered"})

    with pytest.raises(BaasError) as exc_info:
        await _client(handler).create_user("a@b.c", "password1")
    assert exc_info.value.status_code == 422
    assert str(exc_info.value) == "A user with this email address has already been registered"


async def test_error_without_json_body_uses_status():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(BaasError, match="BaaS request failed with status 500"):
        await _client(handler).invoke_function("tb-send-vend", {})


async def test_empty_and_text_bodies():
    def handler(request):
        if request.method == "DELETE":
            return httpx.Response(200)
        return httpx.Response(200, text="queued")

    client = _client(handler)
    assert await client.delete_user("u1") is None
    assert await client.invoke_function("tb-send-vend", {"kg": 2}) == "queued"


def test_service_role_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    with pytest.raises(RuntimeError, match="SUPABASE_SERVICE_ROLE_KEY"):
        BaasClient.service_role()


def test_for_user_uses_anon_key(monkeypatch):
    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")
    client = BaasClient.for_user("jwt")
    assert client.api_key == "anon-key"
    assert client.bearer == "jwt"
