"""Gas vendor onboarding, detail and deliveries."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from gridgas_admin.core.config import settings
from gridgas_admin.domain import (
    AdminAuditLog,
    GasVendor,
    VendorDelivery,
    VendorPlant,
    VendorPricingHistory,
    VendorProfile,
)
from gridgas_admin.services import vendors as vendor_service


@pytest.fixture
async def signup(seed):
    await seed(
        GasVendor(id="v1", name="Acme Gas", active=False),
        VendorProfile(id="p1", vendor_id="v1", email="owner@acme.test"),
        VendorPlant(id="pl1", vendor_id="v1", address="Plot 4"),
        VendorPlant(id="pl2", vendor_id="v1", address="Plot 5", status="rejected"),
    )


async def test_create_vendor(client, session_factory):
    resp = await client.post("/api/admin/gas-vendors", json={"name": " Acme Gas ", "capacityKg": 5000})

    assert resp.status_code == 201
    async with session_factory() as s:
        vendor = await s.get(GasVendor, resp.json()["data"]["id"])
    assert vendor.name == "Acme Gas"
    assert vendor.active is True
    assert vendor.capacity_kg == 5000


async def test_create_vendor_requires_name(client):
    resp = await client.post("/api/admin/gas-vendors", json={"name": "  "})
    assert resp.status_code == 400
    assert resp.json()["error"] == "name is required"


async def test_vendor_detail(client, signup, seed):
    await seed(
        VendorPricingHistory(vendor_id="v1", price_per_kg=900,
                             effective_from=datetime(2025, 1, 1, tzinfo=timezone.utc),
                             effective_until=datetime(2025, 2, 1, tzinfo=timezone.utc)),
        VendorPricingHistory(vendor_id="v1", price_per_kg=950,
                             effective_from=datetime(2025, 2, 1, tzinfo=timezone.utc)),
    )

    resp = await client.get("/api/admin/gas-vendors/v1")

    data = resp.json()["data"]
    assert data["vendor"]["name"] == "Acme Gas"
    assert data["profile"]["id"] == "p1"
    assert data["currentPrice"]["pricePerKg"] == 950
    assert [p["pricePerKg"] for p in data["priceHistory"]] == [950, 900]
    assert {p["id"] for p in data["plants"]} == {"pl1", "pl2"}


async def test_vendor_detail_not_found(client):
    resp = await client.get("/api/admin/gas-vendors/ghost")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Vendor not found"


async def test_approve_vendor(client, signup, session_factory, monkeypatch):
    sent = []

    async def fake_send(to, vendor_name, **kwargs):
        sent.append((to, vendor_name))
        return True

    monkeypatch.setattr(vendor_service, "send_vendor_approved_email", fake_send)

    resp = await client.post(
        "/api/admin/gas-vendors/approve",
        json={"vendorId": "v1", "profileId": "p1", "lat": 6.5, "lng": 3.4},
    )

    assert resp.json() == {"data": {"success": True}}
    async with session_factory() as s:
        vendor = await s.get(GasVendor, "v1")
        profile = await s.get(VendorProfile, "p1")
        plants = dict((await s.execute(select(VendorPlant.id, VendorPlant.status))).all())
        audit = (await s.execute(select(AdminAuditLog))).scalar_one()
    assert vendor.active is True
    assert (vendor.plant_lat, vendor.plant_lng) == (6.5, 3.4)
    assert vendor.verified_at is not None
    assert profile.status == "approved"
    assert plants == {"pl1": "approved", "pl2": "rejected"}
    assert audit.action == "approve_vendor"
    assert audit.meta == {"vendorId": "v1", "lat": 6.5, "lng": 3.4}
    assert sent == [("owner@acme.test", "Acme Gas")]


async def test_approve_survives_email_failure(client, signup, monkeypatch):
    from gridgas_admin.integrations.email import EmailSendError

    async def failing_send(*args, **kwargs):
        raise EmailSendError("vendor_approval_email_failed:500:down")

    monkeypatch.setattr(vendor_service, "send_vendor_approved_email", failing_send)
    resp = await client.post(
        "/api/admin/gas-vendors/approve",
        json={"vendorId": "v1", "profileId": "p1", "lat": 6.5, "lng": 3.4},
    )
    assert resp.status_code == 200


async def test_approve_skips_email_when_not_configured(client, signup, monkeypatch):
    monkeypatch.setattr(settings, "email_service_url", "")
    resp = await client.post(
        "/api/admin/gas-vendors/approve",
        json={"vendorId": "v1", "profileId": "p1", "lat": 0, "lng": 0},
    )
    assert resp.status_code == 200


@pytest.mark.parametrize(
    ("body", "status", "error"),
    [
        ({"profileId": "p1", "lat": 1, "lng": 1}, 400, "vendorId and profileId are required"),
        ({"vendorId": "v1", "profileId": "p1", "lat": "6.5", "lng": 3.4}, 400, "Valid lat and lng coordinates are required"),
        ({"vendorId": "v1", "profileId": "p1", "lat": 6.5}, 400, "Valid lat and lng coordinates are required"),
        ({"vendorId": "v1", "profileId": "nope", "lat": 1, "lng": 1}, 404, "Vendor profile not found"),
        ({"vendorId": "nope", "profileId": "p1", "lat": 1, "lng": 1}, 404, "Vendor not found"),
    ],
)
async def test_approve_validation(client, signup, body, status, error):
    resp = await client.post("/api/admin/gas-vendors/approve", json=body)
    assert resp.status_code == status
    assert resp.json()["error"] == error


async def test_reject_vendor(client, signup, session_factory):
    resp = await client.post("/api/admin/gas-vendors/reject", json={"profileId": "p1"})

    assert resp.status_code == 200
    async with session_factory() as s:
        profile = await s.get(VendorProfile, "p1")
    assert profile.status == "suspended"

    resp = await client.post("/api/admin/gas-vendors/reject", json={})
    assert resp.json()["error"] == "profileId is required"


async def test_create_delivery_defaults_to_ongoing(client, session_factory):
    resp = await client.post(
        "/api/admin/vendor-deliveries",
        json={"vendorId": "v1", "fmId": "fm1", "quantityKg": "250", "deliveredAt": "2025-03-01T10:00:00Z"},
    )

    assert resp.status_code == 201
    async with session_factory() as s:
        delivery = await s.get(VendorDelivery, resp.json()["data"]["id"])
    assert delivery.status == "ongoing"
    assert delivery.quantity_kg == 250
    assert delivery.created_by is not None


@pytest.mark.parametrize(
    ("body", "error"),
    [
        ({"fmId": "fm1", "quantityKg": 5}, "vendorId is required"),
        ({"vendorId": "v1", "quantityKg": 5}, "fmId is required"),
        ({"vendorId": "v1", "fmId": "fm1", "quantityKg": 0}, "quantityKg must be > 0"),
        ({"vendorId": "v1", "fmId": "fm1", "quantityKg": 5, "status": "lost"},
         "status must be one of: ongoing, completed, cancelled"),
    ],
)
async def test_create_delivery_validation(client, body, error):
    resp = await client.post("/api/admin/vendor-deliveries", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == error
