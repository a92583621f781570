"""Console API routes, all mounted under /api/admin."""

from fastapi import APIRouter

from gridgas_admin.routers.admin import (
    admins,
    assets,
    buildings,
    customers,
    facility_managers,
    pricing,
    session,
    support,
    vend,
    vendors,
)

router = APIRouter(prefix="/api/admin")

for _module in (
    vend,
    pricing,
    facility_managers,
    customers,
    buildings,
    assets,
    vendors,
    support,
    admins,
    session,
):
    router.include_router(_module.router)
