"""Staffing domain models: positions, roles, geofences, notes and absences."""

from datetime import date, datetime

from pydantic import BaseModel


class Position(BaseModel):
    """Job position, optionally held by a profile."""

    id: int
    organization_id: int
    position_name: str
    profile_id: int | None = None
    created_at: datetime | None = None


class Role(BaseModel):
    id: int
    organization_id: int
    role_type: str
    profile_id: int | None = None
    created_at: datetime | None = None


class Geofence(BaseModel):
    """Circular area (radius in metres) a profile is expected to work in."""

    id: int
    organization_id: int
    profile_id: int
    latitude: float
    longitude: float
    radius: float
    status: str
    created_at: datetime | None = None


class InternalNote(BaseModel):
    """Note about a profile, written by another profile (owner)."""

    id: int
    organization_id: int
    profile_id: int
    owner_id: int | None = None
    description: str
    created_at: datetime | None = None


class Absence(BaseModel):
    id: int
    organization_id: int
    profile_id: int
    absence_type: str
    starting_date: date
    ending_date: date
    days_of_holidays: int | None = None
    is_paid: bool = False
    comment: str | None = None
    created_at: datetime | None = None
