"""Models package - re-exports for convenience."""

from backend.app.models.client import Client, Location
from backend.app.models.invitation import Invitation, InvitationDeleted, InvitationsSent
from backend.app.models.organization import Organization, OrganizationLogin
from backend.app.models.profile import Profile, UserCredential, UserLogin
from backend.app.models.scheduling import PayRule, PayRuleTarget, ShiftPattern
from backend.app.models.workforce import Absence, Geofence, InternalNote, Position, Role

__all__ = [
    # Organization
    "Organization",
    "OrganizationLogin",
    "Invitation",
    "InvitationsSent",
    "InvitationDeleted",
    # People
    "Profile",
    "UserCredential",
    "UserLogin",
    "Position",
    "Role",
    "Geofence",
    "InternalNote",
    "Absence",
    # Sites
    "Client",
    "Location",
    # Scheduling
    "ShiftPattern",
    "PayRule",
    "PayRuleTarget",
]
