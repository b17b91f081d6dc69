"""Client and location domain models."""

from datetime import datetime

from pydantic import BaseModel


class Client(BaseModel):
    """Customer of an organization."""

    id: int
    organization_id: int
    client_name: str
    client_email: str
    client_phone_number: str | None = None
    contact_person_name: str | None = None
    contact_person_email: str | None = None
    job_title: str | None = None
    reg_no: str | None = None
    vat_no: str | None = None
    website: str | None = None
    sectors: str | None = None
    address_line: str | None = None
    city: str | None = None
    post_code: str | None = None
    county: str | None = None
    country: str | None = None
    is_client_portal_access: bool = False
    created_at: datetime | None = None


class Location(BaseModel):
    """Site where shifts take place, optionally tied to a client."""

    id: int
    organization_id: int
    client_id: int | None = None
    location_name: str
    street_address: str | None = None
    city: str | None = None
    post_code: str | None = None
    state: str | None = None
    country: str | None = None
    directions: str | None = None
    created_at: datetime | None = None
