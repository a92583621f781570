"""Outbound transactional email via the configured HTTP email service."""

from __future__ import annotations

import logging

import httpx

from gridgas_admin.core.config import settings

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    pass


def _vendor_approved_html(vendor_name: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; padding: 16px;">'
        "<h2>Vendor Account Approved</h2>"
        f"<p>Your vendor account (<strong>{vendor_name}</strong>) has been approved and is now active.</p>"
        "<p>You can now proceed to use the vendor app features.</p>"
        "</div>"
    )


async def send_vendor_approved_email(
    to: str,
    vendor_name: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Send the approval notice. Returns False when email is not configured."""
    if not settings.email_enabled:
        logger.debug("Email service not configured; skipping approval email to %s", to)
        return False

    payload = {
        "to": to,
        "from": {
            "email": settings.email_from_vendor_approval,
            "name": settings.email_from_vendor_approval_name,
        },
        "subject": "Vendor Account Approved",
        "html": _vendor_approved_html(vendor_name),
    }
    async with httpx.AsyncClient(timeout=settings.http_timeout, transport=transport) as client:
        response = await client.post(
            settings.email_service_url,
            json=payload,
            headers={"Authorization": f"Bearer {settings.email_service_key}"},
        )
    if response.is_error:
        raise EmailSendError(
            f"vendor_approval_email_failed:{response.status_code}:{response.text[:200]}"
        )
    return True
