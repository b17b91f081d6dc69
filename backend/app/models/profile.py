"""Profile and user credential domain models."""

from datetime import date, datetime

from pydantic import BaseModel


class Profile(BaseModel):
    """Employee profile."""

    id: int
    organization_id: int
    first_name: str
    last_name: str
    employment_type: str | None = None
    contract_no: int | None = None
    mobile_no: str | None = None
    street_name: str | None = None
    city: str | None = None
    post_code: str | None = None
    country: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    nationality: str | None = None
    is_access_to_staff_portal: bool = False
    is_active: bool = True
    created_at: datetime | None = None


class UserCredential(BaseModel):
    """Login credential of a profile (no password hash or token)."""

    id: int
    email: str
    profile_id: int
    created_at: datetime | None = None


class UserLogin(BaseModel):
    """Result of a successful user login."""

    token: str
