"""Support ticket actions and retention cleanup."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from gridgas_admin.domain import AdminAuditLog, SupportTicket, SupportTicketMessage
from gridgas_admin.services.support import DEFAULT_RESOLUTION, ESCALATION_REASON, SupportService, months_before

OLD = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def ticket(seed):
    return await seed(SupportTicket(id="tk1", ticket_id="GG-1001", subject="No gas", status="open", updated_at=OLD))


@pytest.mark.parametrize(
    ("when", "expected"),
    [
        (datetime(2025, 3, 15, 9, 30), datetime(2024, 9, 15, 9, 30)),
        (datetime(2024, 8, 31), datetime(2024, 2, 29)),
        (datetime(2025, 12, 31), datetime(2025, 6, 30)),
        (datetime(2025, 6, 1), datetime(2024, 12, 1)),
    ],
)
def test_months_before(when, expected):
    assert months_before(when, 6) == expected


async def test_reply(client, ticket, session_factory):
    long_text = "x" * 250
    resp = await client.post("/api/admin/support/tk1/reply", json={"message": f"  {long_text}  ", "isInternal": True})

    data = resp.json()["data"]
    assert data["senderType"] == "admin"
    assert data["isInternal"] is True
    assert data["message"] == long_text
    async with session_factory() as s:
        touched = await s.get(SupportTicket, "tk1")
        audit = (await s.execute(select(AdminAuditLog))).scalar_one()
    assert touched.updated_at.replace(tzinfo=None) > OLD.replace(tzinfo=None)
    assert audit.action == "support_reply"
    assert len(audit.new_value["message_preview"]) == 200
    assert audit.meta == {"message_length": 250}


async def test_reply_validation(client, ticket):
    resp = await client.post("/api/admin/support/tk1/reply", json={"message": "   "})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Message is required"

    resp = await client.post("/api/admin/support/missing/reply", json={"message": "hi"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Ticket not found"


async def test_escalate(client, ticket):
    resp = await client.post("/api/admin/support/tk1/escalate")
    data = resp.json()["data"]
    assert data["status"] == "escalated"
    assert data["escalationReason"] == ESCALATION_REASON
    assert data["escalatedAt"] is not None


async def test_close_with_and_without_resolution(client, ticket, seed):
    resp = await client.post("/api/admin/support/tk1/close")
    assert resp.json()["data"]["resolution"] == DEFAULT_RESOLUTION
    assert resp.json()["data"]["status"] == "closed"

    await seed(SupportTicket(id="tk2", status="open"))
    resp = await client.post("/api/admin/support/tk2/close", json={"resolution": "Refunded"})
    assert resp.json()["data"]["resolution"] == "Refunded"


async def test_reassign(client, ticket):
    resp = await client.post("/api/admin/support/tk1/reassign", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "fmId is required"

    resp = await client.post("/api/admin/support/tk1/reassign", json={"fmId": "fm9"})
    assert resp.json()["data"]["fmId"] == "fm9"


async def test_support_role_can_reply_but_admin_cannot(client, ticket, set_role):
    await set_role("support")
    resp = await client.post("/api/admin/support/tk1/escalate")
    assert resp.status_code == 200

    await set_role("admin")
    resp = await client.post("/api/admin/support/tk1/escalate")
    assert resp.status_code == 403


async def test_cleanup_deletes_only_stale_closed_tickets(session, actor):
    now = datetime(2025, 9, 1, tzinfo=timezone.utc)
    session.add_all(
        [
            SupportTicket(id="closed-old", status="closed", updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc)),
            SupportTicket(id="resolved-old", status="resolved", updated_at=datetime(2024, 6, 1, tzinfo=timezone.utc)),
            SupportTicket(id="closed-edge", status="closed", updated_at=datetime(2025, 3, 1, tzinfo=timezone.utc)),
            SupportTicket(id="closed-recent", status="closed", updated_at=datetime(2025, 8, 1, tzinfo=timezone.utc)),
            SupportTicket(id="open-old", status="open", updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ]
    )
    await session.flush()

    deleted, cutoff = await SupportService(session, actor).cleanup_closed(now=now)

    assert cutoff == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert deleted == 3
    remaining = set((await session.execute(select(SupportTicket.id))).scalars().all())
    assert remaining == {"closed-recent", "open-old"}
    audit = (await session.execute(select(AdminAuditLog))).scalar_one()
    assert audit.action == "support_cleanup_old_closed"
    assert audit.new_value == {"deleted_count": 3}


async def test_cleanup_endpoint_is_super_admin_only(client, set_role):
    resp = await client.post("/api/admin/support/cleanup")
    assert resp.status_code == 200
    assert resp.json()["data"]["deletedCount"] == 0

    await set_role("support")
    resp = await client.post("/api/admin/support/cleanup")
    assert resp.status_code == 403
    assert resp.json()["error"] == "Unauthorized"


async def test_reply_message_is_stored(session, actor, ticket):
    await SupportService(session, actor).reply("tk1", "On our way", is_internal=False)
    stored = (await session.execute(select(SupportTicketMessage))).scalar_one()
    assert stored.sender_id == actor.id
    assert stored.is_internal is False
