"""Invitation endpoints - invite people to join by email."""

import re

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, MailerDep, SettingsDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import BadRequest
from backend.app.api.lookups import get_owned
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.invitation import Invitation, InvitationDeleted, InvitationsSent
from backend.app.notifications.mailer import invitation_message
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/invite", tags=["invitations"])

EMAIL_LIST_PATTERN = re.compile(r"^[^\s@,]+@[^\s@,]+\.[^\s@,]+(,\s*[^\s@,]+@[^\s@,]+\.[^\s@,]+)*$")


class InviteRequest(BaseModel):
    """Request body for POST /api/invite."""

    emails: str = Field(..., min_length=1, description="Comma-separated email addresses")


def parse_email_list(emails: str) -> list[str]:
    """Split a comma-separated address list.

    Raises:
        BadRequest: 400 if any address is malformed
    """
    emails = emails.strip()
    if not EMAIL_LIST_PATTERN.match(emails):
        raise BadRequest(ErrorMessages.INVITATION_INVALID_EMAILS)
    return [email.strip() for email in emails.split(",")]


@router.post("", response_model=SuccessEnvelope[InvitationsSent])
async def invite(
    request: InviteRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
    mailer: MailerDep,
    settings: SettingsDep,
) -> JSONResponse:
    """Mail an invitation to every address and record it.

    Returns:
        200 with the addresses mailed; 400 if the list is malformed, in
        which case nothing is sent
    """
    addresses = parse_email_list(request.emails)

    for email in addresses:
        await mailer.send(invitation_message(email, settings.invitation_url))
        await store.create(
            EntityKind.invitation,
            {
                "organization_id": ctx.organization_id,
                "email": email,
                "is_sent": True,
                "is_accepted": False,
                "is_rejected": False,
            },
        )

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.INVITATION_SEND))

    return envelope.success(SuccessMessages.INVITATION_SEND, InvitationsSent(sent_emails=addresses))


@router.get("", response_model=SuccessEnvelope[list[Invitation]])
async def list_invitations(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    rows = await list_scoped(store, EntityKind.invitation, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.INVITATION_ALL_FOUND))

    return envelope.success(
        SuccessMessages.INVITATION_ALL_FOUND, [Invitation.model_validate(row) for row in rows]
    )


@router.get("/{invitation_id}", response_model=SuccessEnvelope[Invitation])
async def get_invitation(
    invitation_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(
        store, EntityKind.invitation, invitation_id, ctx, ErrorMessages.INVITATION_NOT_FOUND
    )

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.INVITATION_FOUND))

    return envelope.success(SuccessMessages.INVITATION_FOUND, Invitation.model_validate(row))


@router.delete("/{invitation_id}", response_model=SuccessEnvelope[InvitationDeleted])
async def delete_invitation(
    invitation_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    await get_owned(
        store, EntityKind.invitation, invitation_id, ctx, ErrorMessages.INVITATION_NOT_FOUND
    )

    await store.delete(EntityKind.invitation, invitation_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.INVITATION_DELETE))

    return envelope.success(SuccessMessages.INVITATION_DELETE, InvitationDeleted(id=invitation_id))
