"""Position endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.lookups import get_owned, get_owned_profile
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.workforce import Position
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/position", tags=["positions"])


class CreatePositionRequest(BaseModel):
    """Request body for POST /api/position."""

    position_name: str = Field(..., min_length=1, max_length=200)
    profile_id: int | None = None


class UpdatePositionRequest(BaseModel):
    """Request body for PUT /api/position/{id}."""

    position_name: str | None = Field(None, min_length=1, max_length=200)
    profile_id: int | None = None


@router.post("", response_model=SuccessEnvelope[Position], status_code=status.HTTP_201_CREATED)
async def create_position(
    request: CreatePositionRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a position, optionally already held by a profile.

    Returns:
        201 with the position; 404 if profile_id is not a profile of the
        caller's organization
    """
    if request.profile_id is not None:
        await get_owned_profile(store, request.profile_id, ctx)

    values = request.model_dump(exclude_none=True)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.position, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.POSITION_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.POSITION_CREATE, Position.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Position]])
async def list_positions(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    rows = await list_scoped(store, EntityKind.position, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.POSITION_ALL_FOUND))

    return envelope.success(
        SuccessMessages.POSITION_ALL_FOUND, [Position.model_validate(row) for row in rows]
    )


@router.get("/{position_id}", response_model=SuccessEnvelope[Position])
async def get_position(
    position_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.position, position_id, ctx, ErrorMessages.POSITION_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.POSITION_FOUND))

    return envelope.success(SuccessMessages.POSITION_FOUND, Position.model_validate(row))


@router.put("/{position_id}", response_model=SuccessEnvelope[Position])
async def update_position(
    position_id: int,
    request: UpdatePositionRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    await get_owned(store, EntityKind.position, position_id, ctx, ErrorMessages.POSITION_NOT_FOUND)

    values = request.model_dump(exclude_none=True)
    if "profile_id" in values:
        await get_owned_profile(store, values["profile_id"], ctx)

    updated = await store.update(EntityKind.position, position_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.POSITION_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.POSITION_UPDATE))

    return envelope.success(SuccessMessages.POSITION_UPDATE, Position.model_validate(updated))


@router.delete("/{position_id}", response_model=SuccessEnvelope[Position])
async def delete_position(
    position_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.position, position_id, ctx, ErrorMessages.POSITION_NOT_FOUND)

    await store.delete(EntityKind.position, position_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.POSITION_DELETE))

    return envelope.success(SuccessMessages.POSITION_DELETE, Position.model_validate(row))


@router.put("/{position_id}/assign/{profile_id}", response_model=SuccessEnvelope[Position])
async def assign_position(
    position_id: int,
    profile_id: int,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Give a position to a profile.

    Returns:
        200 with the position; 404 for an unknown position or profile;
        400 if the profile already holds it
    """
    row = await get_owned(store, EntityKind.position, position_id, ctx, ErrorMessages.POSITION_NOT_FOUND)
    await get_owned_profile(store, profile_id, ctx)
    if row.get("profile_id") == profile_id:
        raise AlreadyExists(ErrorMessages.POSITION_ALREADY_ASSIGNED)

    updated = await store.update(EntityKind.position, position_id, {"profile_id": profile_id})
    if updated is None:
        raise NotFound(ErrorMessages.POSITION_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.POSITION_ASSIGNED))

    return envelope.success(SuccessMessages.POSITION_ASSIGNED, Position.model_validate(updated))
