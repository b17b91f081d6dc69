"""Internal note endpoints - notes kept about a profile."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.lookups import get_owned, get_owned_profile
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.workforce import InternalNote
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/internalNotes", tags=["internal-notes"])


class CreateNoteRequest(BaseModel):
    """Request body for POST /api/internalNotes.

    owner_id defaults to the calling profile; organizations may leave it
    empty or name one of their profiles.
    """

    profile_id: int
    description: str = Field(..., min_length=1)
    owner_id: int | None = None


class UpdateNoteRequest(BaseModel):
    """Request body for PATCH /api/internalNotes/{id}."""

    description: str | None = Field(None, min_length=1)
    owner_id: int | None = None


@router.post("", response_model=SuccessEnvelope[InternalNote], status_code=status.HTTP_201_CREATED)
async def create_note(
    request: CreateNoteRequest, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Write a note about a profile.

    Returns:
        201 with the note; 404 for an unknown profile or owner; 400 if the
        owner already wrote a note about this profile
    """
    await get_owned_profile(store, request.profile_id, ctx)

    owner_id = request.owner_id
    if not ctx.is_organization:
        owner_id = ctx.identity.id
    elif owner_id is not None:
        await get_owned_profile(store, owner_id, ctx)

    existing = await store.find_one(
        EntityKind.internal_note, profile_id=request.profile_id, owner_id=owner_id
    )
    if existing is not None:
        raise AlreadyExists(ErrorMessages.NOTE_EXISTS)

    row = await store.create(
        EntityKind.internal_note,
        {
            "organization_id": ctx.organization_id,
            "profile_id": request.profile_id,
            "owner_id": owner_id,
            "description": request.description,
        },
    )

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.NOTE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.NOTE_CREATE, InternalNote.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[InternalNote]])
async def list_notes(
    ctx: CurrentContext, store: StoreDep, audit: AuditDep, profile_id: int | None = None
) -> JSONResponse:
    filters = {} if profile_id is None else {"profile_id": profile_id}
    rows = await list_scoped(store, EntityKind.internal_note, ctx, **filters)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.NOTE_ALL_FOUND))

    return envelope.success(
        SuccessMessages.NOTE_ALL_FOUND, [InternalNote.model_validate(row) for row in rows]
    )


@router.get("/{note_id}", response_model=SuccessEnvelope[InternalNote])
async def get_note(note_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    row = await get_owned(store, EntityKind.internal_note, note_id, ctx, ErrorMessages.NOTE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.NOTE_FOUND))

    return envelope.success(SuccessMessages.NOTE_FOUND, InternalNote.model_validate(row))


@router.patch("/{note_id}", response_model=SuccessEnvelope[InternalNote])
async def update_note(
    note_id: int,
    request: UpdateNoteRequest,
    ctx: CurrentContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Edit a note. A profile caller may edit only notes it owns."""
    row = await get_owned(store, EntityKind.internal_note, note_id, ctx, ErrorMessages.NOTE_NOT_FOUND)
    if not ctx.is_organization and row.get("owner_id") != ctx.identity.id:
        raise NotFound(ErrorMessages.NOTE_NOT_FOUND)

    values = request.model_dump(exclude_none=True)
    if not ctx.is_organization:
        values.pop("owner_id", None)
    elif "owner_id" in values:
        await get_owned_profile(store, values["owner_id"], ctx)

    updated = await store.update(EntityKind.internal_note, note_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.NOTE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.NOTE_UPDATE))

    return envelope.success(SuccessMessages.NOTE_UPDATE, InternalNote.model_validate(updated))


@router.delete("/{note_id}", response_model=SuccessEnvelope[InternalNote])
async def delete_note(
    note_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Delete a note. A profile caller may delete only notes it owns."""
    row = await get_owned(store, EntityKind.internal_note, note_id, ctx, ErrorMessages.NOTE_NOT_FOUND)
    if not ctx.is_organization and row.get("owner_id") != ctx.identity.id:
        raise NotFound(ErrorMessages.NOTE_NOT_FOUND)

    await store.delete(EntityKind.internal_note, note_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.NOTE_DELETE))

    return envelope.success(SuccessMessages.NOTE_DELETE, InternalNote.model_validate(row))
