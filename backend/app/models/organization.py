"""Organization domain models."""

from datetime import datetime

from pydantic import BaseModel


class Organization(BaseModel):
    """Organization as returned by the API (no password hash or token)."""

    id: int
    name: str
    business_email: str
    company_name: str | None = None
    phone_number: str | None = None
    created_at: datetime | None = None


class OrganizationLogin(BaseModel):
    """Result of a successful organization login."""

    business_email: str
    token: str
    phone_number: str | None = None
    company_name: str | None = None
