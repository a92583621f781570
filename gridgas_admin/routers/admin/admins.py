"""Console staff management. Every route here is super-admin only."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_super_admin
from gridgas_admin.db.base import get_db
from gridgas_admin.integrations.baas import BaasClient, get_baas_client
from gridgas_admin.schemas.admins import (
    AdminCreatedOut,
    AdminCreateRequest,
    AdminPinRequest,
    AdminRoleRequest,
    AdminUpdatedOut,
    AdminUpdateRequest,
)
from gridgas_admin.schemas.common import SuccessOut
from gridgas_admin.services.admins import AdminService

router = APIRouter(prefix="/settings/admins", tags=["Admin users"])


@router.post("/create", response_model=DataResponse[AdminCreatedOut])
@fallback_message("Failed to create admin")
async def create_admin(
    body: AdminCreateRequest,
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    created = await AdminService(session, baas, user, request).create_admin(
        body.email, body.full_name, body.role, body.password, body.pin
    )
    return DataResponse(
        data=AdminCreatedOut(admin_id=created.admin_id, temporary_password=created.temporary_password)
    )


@router.post("/{admin_id}/update", response_model=DataResponse[AdminUpdatedOut])
@fallback_message("Failed to update admin")
async def update_admin(
    admin_id: str,
    body: AdminUpdateRequest,
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    result = await AdminService(session, baas, user, request).update_admin(
        admin_id,
        full_name=body.full_name,
        suspended=body.suspended,
        remove_passworded_access=body.remove_passworded_access,
        force_reset_password=body.force_reset_password,
    )
    return DataResponse(
        data=AdminUpdatedOut(updated=result.updated, temporary_password=result.temporary_password)
    )


@router.post("/{admin_id}/role", response_model=DataResponse[SuccessOut])
@fallback_message("Failed to update role")
async def change_admin_role(
    admin_id: str,
    body: AdminRoleRequest,
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    await AdminService(session, baas, user, request).change_role(admin_id, body.role)
    return DataResponse(data=SuccessOut())


@router.post("/{admin_id}/pin", response_model=DataResponse[SuccessOut])
@fallback_message("Failed to set PIN")
async def set_admin_pin(
    admin_id: str,
    body: AdminPinRequest,
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    await AdminService(session, baas, user, request).set_pin(admin_id, body.pin)
    return DataResponse(data=SuccessOut())


@router.delete("/{admin_id}", response_model=DataResponse[SuccessOut])
@fallback_message("Failed to delete admin")
async def delete_admin(
    admin_id: str,
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
    baas: BaasClient = Depends(get_baas_client),
):
    await AdminService(session, baas, user, request).delete_admin(admin_id)
    return DataResponse(data=SuccessOut())
