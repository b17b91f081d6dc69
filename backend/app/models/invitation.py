"""Invitation domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class Invitation(BaseModel):
    id: int
    organization_id: int
    email: str
    is_sent: bool = False
    is_accepted: bool = False
    is_rejected: bool = False
    created_at: datetime | None = None


class InvitationsSent(BaseModel):
    """Result of POST /api/invite."""

    sent_emails: list[str] = Field(..., serialization_alias="sentEmails")


class InvitationDeleted(BaseModel):
    id: int
