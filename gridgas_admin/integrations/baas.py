"""Thin async HTTP wrapper around the hosted BaaS (auth admin, edge functions, storage).

Two credential modes:
  BaasClient.service_role()  : service-role key, bypasses row security
  BaasClient.for_user(token) : anon key + the caller's bearer token
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from gridgas_admin.core.config import settings

logger = logging.getLogger(__name__)


def _upstream_message(body: str) -> str | None:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for key in ("msg", "message", "error_description", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class BaasError(Exception):
    """Non-2xx response from the BaaS. The message is the upstream error text when it has one."""

    def __init__(self, status_code: int, body: str, path: str = ""):
        self.status_code = status_code
        self.body = body
        self.path = path
        super().__init__(_upstream_message(body) or f"BaaS request failed with status {status_code}")


class BaasClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        bearer: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bearer = bearer or api_key
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def service_role(cls, transport: httpx.AsyncBaseTransport | None = None) -> BaasClient:
        key = settings.supabase_service_role_key
        if not key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
        return cls(settings.supabase_url, key, transport=transport)

    @classmethod
    def for_user(
        cls, token: str, transport: httpx.AsyncBaseTransport | None = None
    ) -> BaasClient:
        return cls(settings.supabase_url, settings.supabase_anon_key, token, transport=transport)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _headers(self, bearer: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {bearer or self.bearer}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        bearer: str | None = None,
    ) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(
                method, path, json=json, headers=self._headers(bearer)
            )

        if response.is_error:
            logger.warning(
                "BaaS %s %s -> %s: %s", method, path, response.status_code, response.text[:500]
            )
            raise BaasError(response.status_code, response.text, path)

        if not response.content:
            return None
        if response.headers.get("content-type", "").startswith("application/json"):
            return response.json()
        return response.text

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def get_user(self, token: str | None = None) -> dict:
        """Resolve the user behind *token* (or this client's own bearer)."""
        return await self._request("GET", "/auth/v1/user", bearer=token)

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirm: bool = True,
        user_metadata: dict | None = None,
    ) -> dict:
        payload = {
            "email": email,
            "password": password,
            "email_confirm": email_confirm,
            "user_metadata": user_metadata or {},
        }
        return await self._request("POST", "/auth/v1/admin/users", json=payload)

    async def get_user_by_id(self, user_id: str) -> dict:
        return await self._request("GET", f"/auth/v1/admin/users/{user_id}")

    async def update_user_by_id(self, user_id: str, attributes: dict) -> dict:
        return await self._request("PUT", f"/auth/v1/admin/users/{user_id}", json=attributes)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/auth/v1/admin/users/{user_id}")

    # ------------------------------------------------------------------
    # Edge functions
    # ------------------------------------------------------------------

    async def invoke_function(self, name: str, payload: dict) -> Any:
        return await self._request("POST", f"/functions/v1/{name}", json=payload)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    async def list_buckets(self) -> list[dict]:
        return await self._request("GET", "/storage/v1/bucket") or []

    async def create_bucket(
        self,
        name: str,
        *,
        public: bool = False,
        file_size_limit: str | int | None = None,
        allowed_mime_types: list[str] | None = None,
    ) -> dict:
        payload: dict[str, Any] = {"id": name, "name": name, "public": public}
        if file_size_limit is not None:
            payload["file_size_limit"] = file_size_limit
        if allowed_mime_types is not None:
            payload["allowed_mime_types"] = allowed_mime_types
        return await self._request("POST", "/storage/v1/bucket", json=payload)


def get_baas_client() -> BaasClient:
    """FastAPI dependency: a service-role BaaS client."""
    return BaasClient.service_role()
