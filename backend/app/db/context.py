"""Caller identity and request context."""

from dataclasses import dataclass
from typing import Literal

UserType = Literal["organization", "profile"]


@dataclass(frozen=True)
class OrganizationIdentity:
    """Caller authenticated with an organization token."""

    id: int
    name: str
    business_email: str
    company_name: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True)
class ProfileIdentity:
    """Caller authenticated with a user token, resolved to its profile."""

    id: int
    first_name: str
    last_name: str
    organization_id: int
    user_id: int


Identity = OrganizationIdentity | ProfileIdentity


@dataclass(frozen=True)
class RequestContext:
    """Request context carrying the resolved caller identity.

    Built once by the auth dependency and read-only afterwards. Used for
    tenancy scoping in store queries and for attribution in audit entries.
    """

    identity: Identity

    @property
    def is_organization(self) -> bool:
        return isinstance(self.identity, OrganizationIdentity)

    @property
    def user_type(self) -> UserType:
        return "organization" if self.is_organization else "profile"

    @property
    def owner(self) -> str:
        """Display name used as the audit owner."""
        identity = self.identity
        if isinstance(identity, OrganizationIdentity):
            return identity.name
        return f"{identity.first_name} {identity.last_name}"

    @property
    def organization_id(self) -> int:
        """Organization whose data the caller may see."""
        identity = self.identity
        if isinstance(identity, OrganizationIdentity):
            return identity.id
        return identity.organization_id
