"""Tenancy-safe query helpers."""

from typing import Any

from backend.app.db.context import RequestContext
from backend.app.db.repositories import EntityKind, EntityStore, Row


async def get_scoped(
    store: EntityStore, kind: EntityKind, entity_id: int, ctx: RequestContext
) -> Row | None:
    """Get a row only if it belongs to the caller's organization.

    Args:
        store: Entity store
        kind: Entity table with an organization_id column
        entity_id: Primary key
        ctx: Request context

    Returns:
        Row or None if missing or owned by another organization
    """
    row = await store.get(kind, entity_id)
    if row is None or row.get("organization_id") != ctx.organization_id:
        return None
    return row


async def list_scoped(
    store: EntityStore, kind: EntityKind, ctx: RequestContext, **filters: Any
) -> list[Row]:
    """List rows of the caller's organization.

    Args:
        store: Entity store
        kind: Entity table with an organization_id column
        ctx: Request context
        **filters: Additional column filters

    Returns:
        Rows filtered by organization_id
    """
    return await store.list(kind, organization_id=ctx.organization_id, **filters)


async def get_scoped_credential(
    store: EntityStore, user_id: int, ctx: RequestContext
) -> Row | None:
    """Get a user credential whose profile belongs to the caller's organization."""
    credential = await store.get(EntityKind.user_credential, user_id)
    if credential is None:
        return None

    profile = await get_scoped(store, EntityKind.profile, credential["profile_id"], ctx)
    if profile is None:
        return None
    return credential


async def list_scoped_credentials(store: EntityStore, ctx: RequestContext) -> list[Row]:
    """List user credentials of the caller's organization's profiles."""
    profile_ids = {row["id"] for row in await list_scoped(store, EntityKind.profile, ctx)}
    return [
        row
        for row in await store.list(EntityKind.user_credential)
        if row["profile_id"] in profile_ids
    ]
