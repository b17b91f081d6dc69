"""Route-level lookups that answer 404 for rows outside the caller's organization."""

from backend.app.api.errors import NotFound
from backend.app.api.messages import ErrorMessages
from backend.app.db.context import RequestContext
from backend.app.db.queries import get_scoped
from backend.app.db.repositories import EntityKind, EntityStore, Row


async def get_owned(
    store: EntityStore, kind: EntityKind, entity_id: int, ctx: RequestContext, message: str
) -> Row:
    """Get a row of the caller's organization.

    Raises:
        NotFound: 404 with `message` if missing or owned by another organization
    """
    row = await get_scoped(store, kind, entity_id, ctx)
    if row is None:
        raise NotFound(message)
    return row


async def get_owned_profile(store: EntityStore, profile_id: int, ctx: RequestContext) -> Row:
    return await get_owned(store, EntityKind.profile, profile_id, ctx, ErrorMessages.PROFILE_NOT_FOUND)


async def get_own_or_managed_profile(
    store: EntityStore, profile_id: int, ctx: RequestContext
) -> Row:
    """Get a profile the caller may act for.

    Organizations act for any of their profiles; a profile caller only for
    itself. Anything else is answered as a missing profile.
    """
    if not ctx.is_organization and ctx.identity.id != profile_id:
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)
    return await get_owned_profile(store, profile_id, ctx)
