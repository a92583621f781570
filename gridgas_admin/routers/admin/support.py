"""Support ticket actions. Cleanup is restricted to super admins."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gridgas_admin.core.exceptions import fallback_message
from gridgas_admin.core.response import DataResponse
from gridgas_admin.core.security import AuthUser, require_feature, require_super_admin
from gridgas_admin.db.base import get_db
from gridgas_admin.schemas.support import (
    CleanupOut,
    CloseTicketRequest,
    ReassignTicketRequest,
    ReplyRequest,
    TicketMessageOut,
    TicketOut,
)
from gridgas_admin.services.support import SupportService

router = APIRouter(prefix="/support", tags=["Support"])


@router.post("/cleanup", response_model=DataResponse[CleanupOut])
@fallback_message("Failed to clean up support tickets")
async def cleanup_tickets(
    request: Request,
    user: AuthUser = Depends(require_super_admin),
    session: AsyncSession = Depends(get_db),
):
    deleted, cutoff = await SupportService(session, user, request).cleanup_closed()
    return DataResponse(data=CleanupOut(deleted_count=deleted, cutoff=cutoff))


@router.post("/{ticket_id}/reply", response_model=DataResponse[TicketMessageOut])
@fallback_message("Failed to send reply")
async def reply_to_ticket(
    ticket_id: str,
    body: ReplyRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("support.reply")),
    session: AsyncSession = Depends(get_db),
):
    message = await SupportService(session, user, request).reply(ticket_id, body.message, body.is_internal)
    return DataResponse(data=TicketMessageOut.model_validate(message))


@router.post("/{ticket_id}/escalate", response_model=DataResponse[TicketOut])
@fallback_message("Failed to escalate ticket")
async def escalate_ticket(
    ticket_id: str,
    request: Request,
    user: AuthUser = Depends(require_feature("support.escalate")),
    session: AsyncSession = Depends(get_db),
):
    ticket = await SupportService(session, user, request).escalate(ticket_id)
    return DataResponse(data=TicketOut.model_validate(ticket))


@router.post("/{ticket_id}/close", response_model=DataResponse[TicketOut])
@fallback_message("Failed to close ticket")
async def close_ticket(
    ticket_id: str,
    request: Request,
    body: Optional[CloseTicketRequest] = None,
    user: AuthUser = Depends(require_feature("support.close")),
    session: AsyncSession = Depends(get_db),
):
    resolution = body.resolution if body else None
    ticket = await SupportService(session, user, request).close(ticket_id, resolution)
    return DataResponse(data=TicketOut.model_validate(ticket))


@router.post("/{ticket_id}/reassign", response_model=DataResponse[TicketOut])
@fallback_message("Failed to reassign ticket")
async def reassign_ticket(
    ticket_id: str,
    body: ReassignTicketRequest,
    request: Request,
    user: AuthUser = Depends(require_feature("support.reassign")),
    session: AsyncSession = Depends(get_db),
):
    ticket = await SupportService(session, user, request).reassign(ticket_id, body.fm_id)
    return DataResponse(data=TicketOut.model_validate(ticket))
