"""Global tariff and per-building price overrides."""

import pytest
from sqlalchemy import select

from gridgas_admin.domain import AdminAuditLog, Building, BuildingTariffOverride

GLOBAL_URL = "/api/admin/price-settings/global"
BUILDINGS_URL = "/api/admin/price-settings/buildings"


async def _audit_rows(session_factory):
    async with session_factory() as s:
        return list((await s.execute(select(AdminAuditLog).order_by(AdminAuditLog.created_at))).scalars().all())


async def test_update_global_creates_then_updates(client, session_factory):
    resp = await client.post(GLOBAL_URL, json={"pricePerKg": "1800", "upliftFirstNKgPerMonth": 5})
    assert resp.status_code == 200
    tariff = resp.json()["data"]["tariff"]
    assert tariff["id"] == 1
    assert tariff["globalRatePerKg"] == 1800
    assert tariff["upliftFirstNKgPerMonth"] == 5
    assert tariff["upliftAmountPerKg"] == 0

    resp = await client.post(GLOBAL_URL, json={"pricePerKg": 1900, "upliftAmountPerKg": 50})
    assert resp.json()["data"]["tariff"]["globalRatePerKg"] == 1900

    first, second = await _audit_rows(session_factory)
    assert first.action == second.action == "updated_tariff"
    assert first.old_value is None
    assert second.old_value["global_rate_per_kg"] == 1800
    assert second.new_value["global_rate_per_kg"] == 1900
    assert second.meta["scope"] == "global"


@pytest.mark.parametrize(
    ("body", "error"),
    [
        ({"pricePerKg": ""}, "Price is required."),
        ({}, "Price must be a number."),
        ({"pricePerKg": "abc"}, "Price must be a valid number."),
        ({"pricePerKg": 0}, "Price must be greater than 0."),
        ({"pricePerKg": 1500, "upliftFirstNKgPerMonth": -1}, "Uplift first N kg per month must be 0 or greater."),
        ({"pricePerKg": 1500, "upliftAmountPerKg": "x"}, "Uplift amount per kg must be a valid number."),
    ],
)
async def test_update_global_validation(client, body, error):
    resp = await client.post(GLOBAL_URL, json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == error


async def test_update_global_requires_feature(client, set_role):
    await set_role("admin")
    resp = await client.post(GLOBAL_URL, json={"pricePerKg": 1500})
    assert resp.status_code == 403


@pytest.mark.parametrize(
    ("building_ids", "error"),
    [
        (None, "Select at least one building."),
        ([], "Select at least one building."),
        ("b1", "Select at least one building."),
        (["  ", 3], "Invalid building IDs."),
    ],
)
async def test_update_buildings_validation(client, building_ids, error):
    resp = await client.post(BUILDINGS_URL, json={"buildingIds": building_ids, "pricePerKg": 1500})
    assert resp.status_code == 400
    assert resp.json()["error"] == error


async def test_update_buildings_upserts_one_override_each(client, seed, session_factory):
    await seed(
        Building(id="b1", address="12 Marina Rd"),
        Building(id="b2", name="Palm Court"),
        BuildingTariffOverride(building_id="b1", rate_per_kg=1400),
    )

    resp = await client.post(BUILDINGS_URL, json={"buildingIds": ["b1", " b2 ", "b1"], "pricePerKg": 1700})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["count"] == 2
    assert {o["buildingId"]: o["ratePerKg"] for o in data["overrides"]} == {"b1": 1700, "b2": 1700}

    async with session_factory() as s:
        rows = (await s.execute(select(BuildingTariffOverride))).scalars().all()
    assert len(rows) == 2

    [audit] = await _audit_rows(session_factory)
    assert audit.entity_type == "building_tariff_overrides"
    assert [r["rate_per_kg"] for r in audit.old_value] == [1400]
    labels = {item["id"]: item["label"] for item in audit.meta["buildingLabels"]}
    assert labels == {"b1": "12 Marina Rd", "b2": "Palm Court"}
