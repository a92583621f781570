import pytest
from sqlalchemy import select

from gridgas_admin.domain import AdminAuditLog, FmProfile, Meter, TenantProfile


@pytest.fixture
async def fm(seed):
    return await seed(FmProfile(id="fm1", full_name="Bola FM", email="bola@fm.test"))


async def test_block_fm(client, fm, session_factory):
    resp = await client.post("/api/admin/facility-managers/fm1/status", json={"status": "blocked"})

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "blocked"
    async with session_factory() as s:
        audit = (await s.execute(select(AdminAuditLog))).scalar_one()
    assert audit.action == "blocked_fm"
    assert audit.old_value == {"status": "active"}
    assert audit.meta == {"fm_name": "Bola FM", "fm_email": "bola@fm.test"}


async def test_unblock_fm_audits_unblocked(client, seed, session_factory):
    await seed(FmProfile(id="fm2", status="blocked"))
    await client.post("/api/admin/facility-managers/fm2/status", json={"status": "active"})
    async with session_factory() as s:
        audit = (await s.execute(select(AdminAuditLog))).scalar_one()
    assert audit.action == "unblocked_fm"


async def test_status_validation(client, fm):
    resp = await client.post("/api/admin/facility-managers/fm1/status", json={"status": " "})
    assert resp.status_code == 400
    assert resp.json()["error"] == "status is required"

    resp = await client.post("/api/admin/facility-managers/missing/status", json={"status": "blocked"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Facility manager not found"


async def test_lock_meters_without_tenants(client, fm):
    resp = await client.post("/api/admin/facility-managers/fm1/lock-meters")
    assert resp.json()["data"] == {"count": 0, "message": "No tenants found for this FM"}


async def test_lock_meters_without_meters(client, fm, seed):
    await seed(TenantProfile(id="t1", claimed_by_fm_id="fm1"))
    resp = await client.post("/api/admin/facility-managers/fm1/lock-meters")
    assert resp.json()["data"] == {"count": 0, "message": "No meters found for this FM's tenants"}


async def test_lock_and_unlock_meters(client, fm, seed, session_factory):
    await seed(
        TenantProfile(id="t1", claimed_by_fm_id="fm1", meter_id="m1"),
        TenantProfile(id="t2", claimed_by_fm_id="fm1", meter_id="m2"),
        TenantProfile(id="t3", claimed_by_fm_id="other", meter_id="m3"),
        Meter(id="m1", meter_number="A1"),
        Meter(id="m2", meter_number="A2"),
        Meter(id="m3", meter_number="A3"),
    )

    resp = await client.post("/api/admin/facility-managers/fm1/lock-meters")
    assert resp.json()["data"] == {"count": 2, "message": "Locked 2 meter(s)"}

    async with session_factory() as s:
        statuses = dict((await s.execute(select(Meter.id, Meter.status))).all())
    assert statuses == {"m1": "locked", "m2": "locked", "m3": "active"}

    resp = await client.post("/api/admin/facility-managers/fm1/unlock-meters")
    assert resp.json()["data"] == {"count": 2, "message": "Unlocked 2 meter(s)"}

    async with session_factory() as s:
        actions = (await s.execute(select(AdminAuditLog.action).order_by(AdminAuditLog.created_at))).scalars().all()
    assert actions == ["locked_all_meters_for_fm", "unlocked_all_meters_for_fm"]
