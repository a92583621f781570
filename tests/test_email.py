import json

import httpx
import pytest

from gridgas_admin.core.config import settings
from gridgas_admin.integrations.email import EmailSendError, send_vendor_approved_email


@pytest.fixture
def email_configured(monkeypatch):
    monkeypatch.setattr(settings, "email_service_url", "http://mail.test/send")
    monkeypatch.setattr(settings, "email_service_key", "mail-key")


async def test_skipped_when_not_configured(monkeypatch):
    monkeypatch.setattr(settings, "email_service_url", "")

    def handler(request):  # pragma: no cover
        raise AssertionError("should not be called")

    assert await send_vendor_approved_email("v@x.test", "Acme", transport=httpx.MockTransport(handler)) is False


async def test_posts_approval_notice(email_configured):
    captured = {}

    def handler(request):
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(202, json={"id": "msg-1"})

    sent = await send_vendor_approved_email("v@x.test", "Acme Gas", transport=httpx.MockTransport(handler))

    assert sent is True
    assert captured["auth"] == "Bearer mail-key"
    assert captured["body"]["to"] == "v@x.test"
    assert captured["body"]["subject"] == "Vendor Account Approved"
    assert captured["body"]["from"]["email"] == settings.email_from_vendor_approval
    assert "Acme Gas" in captured["body"]["html"]


async def test_error_response_raises(email_configured):
    def handler(request):
        return httpx.Response(500, text="down")

    with pytest.raises(EmailSendError, match="vendor_approval_email_failed:500"):
        await send_vendor_approved_email("v@x.test", "Acme", transport=httpx.MockTransport(handler))
