"""Entity store protocol and identity records."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

Row = dict[str, Any]


class EntityKind(str, Enum):
    """Entity tables exposed by the store."""

    organization = "organization"
    user_credential = "user_credential"
    profile = "profile"
    client = "client"
    location = "location"
    position = "position"
    role = "role"
    geofence = "geofence"
    shift_pattern = "shift_pattern"
    pay_rule = "pay_rule"
    internal_note = "internal_note"
    invitation = "invitation"
    absence = "absence"


@dataclass
class OrganizationRecord:
    """Organization row as needed by identity resolution."""

    id: int
    name: str
    business_email: str
    company_name: str | None
    phone_number: str | None
    created_at: datetime | None = None


@dataclass
class ProfileRecord:
    """Profile (employee) row as needed by identity resolution."""

    id: int
    organization_id: int
    first_name: str
    last_name: str


@dataclass
class UserCredentialRecord:
    """User credential row with its linked profile."""

    id: int
    email: str
    profile_id: int
    profile: ProfileRecord | None


def organization_record(row: Row) -> OrganizationRecord:
    """Build an OrganizationRecord from a store row."""
    return OrganizationRecord(
        id=row["id"],
        name=row["name"],
        business_email=row["business_email"],
        company_name=row.get("company_name"),
        phone_number=row.get("phone_number"),
        created_at=row.get("created_at"),
    )


def profile_record(row: Row) -> ProfileRecord:
    """Build a ProfileRecord from a store row."""
    return ProfileRecord(
        id=row["id"],
        organization_id=row["organization_id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
    )


class EntityStore(Protocol):
    """Generic single-entity store shared by every controller."""

    async def get(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Get a row by primary key.

        Args:
            kind: Entity table
            entity_id: Primary key

        Returns:
            Row or None if not found
        """
        ...

    async def find_one(self, kind: EntityKind, **filters: Any) -> Row | None:
        """Get the first row whose columns equal the given filters."""
        ...

    async def list(self, kind: EntityKind, **filters: Any) -> list[Row]:
        """List rows matching the filters, ordered by id."""
        ...

    async def create(self, kind: EntityKind, values: Row) -> Row:
        """Insert a row and return it with its generated id."""
        ...

    async def update(self, kind: EntityKind, entity_id: int, values: Row) -> Row | None:
        """Update a row.

        Returns:
            Updated row or None if the id does not exist
        """
        ...

    async def delete(self, kind: EntityKind, entity_id: int) -> Row | None:
        """Delete a row.

        Returns:
            Deleted row or None if the id does not exist
        """
        ...

    async def find_organization_by_id(self, organization_id: int) -> OrganizationRecord | None:
        """Look up the organization named by an organization token."""
        ...

    async def find_user_credential_by_id(self, user_id: int) -> UserCredentialRecord | None:
        """Look up the credential named by a user token, with its profile."""
        ...
