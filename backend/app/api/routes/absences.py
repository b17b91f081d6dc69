"""Absence endpoints.

Plain records of leave. Holiday allowances and date arithmetic are not
applied here.
"""

from datetime import date

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.lookups import get_own_or_managed_profile, get_owned
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.context import RequestContext
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind, EntityStore, Row
from backend.app.models.workforce import Absence
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/absence", tags=["absences"])


class CreateAbsenceRequest(BaseModel):
    """Request body for POST /api/absence."""

    profile_id: int
    absence_type: str = Field(..., min_length=1, max_length=50)
    starting_date: date
    ending_date: date
    days_of_holidays: int | None = Field(None, ge=0)
    is_paid: bool = False
    comment: str | None = None


class UpdateAbsenceRequest(BaseModel):
    """Request body for PUT /api/absence/{id}. The profile cannot change."""

    absence_type: str | None = Field(None, min_length=1, max_length=50)
    starting_date: date | None = None
    ending_date: date | None = None
    days_of_holidays: int | None = Field(None, ge=0)
    is_paid: bool | None = None
    comment: str | None = None


async def _get_absence(
    store: EntityStore, absence_id: int, ctx: RequestContext
) -> Row:
    # Profile callers only see their own absences
    row = await get_owned(store, EntityKind.absence, absence_id, ctx, ErrorMessages.ABSENCE_NOT_FOUND)
    if not ctx.is_organization and row["profile_id"] != ctx.identity.id:
        raise NotFound(ErrorMessages.ABSENCE_NOT_FOUND)
    return row


@router.post("", response_model=SuccessEnvelope[Absence], status_code=status.HTTP_201_CREATED)
async def create_absence(
    request: CreateAbsenceRequest, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Record an absence for a profile.

    Returns:
        201 with the absence; 404 if the caller may not act for the
        profile; 400 if the profile already has an absence with the same
        dates
    """
    await get_own_or_managed_profile(store, request.profile_id, ctx)

    existing = await store.find_one(
        EntityKind.absence,
        profile_id=request.profile_id,
        starting_date=request.starting_date,
        ending_date=request.ending_date,
    )
    if existing is not None:
        raise AlreadyExists(ErrorMessages.ABSENCE_EXISTS)

    values = request.model_dump(exclude_none=True)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.absence, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.ABSENCE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.ABSENCE_CREATE, Absence.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Absence]])
async def list_absences(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    """List absences; a profile caller sees only its own."""
    filters = {} if ctx.is_organization else {"profile_id": ctx.identity.id}
    rows = await list_scoped(store, EntityKind.absence, ctx, **filters)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ABSENCE_ALL_FOUND))

    return envelope.success(
        SuccessMessages.ABSENCE_ALL_FOUND, [Absence.model_validate(row) for row in rows]
    )


@router.get("/{absence_id}", response_model=SuccessEnvelope[Absence])
async def get_absence(
    absence_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await _get_absence(store, absence_id, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ABSENCE_FOUND))

    return envelope.success(SuccessMessages.ABSENCE_FOUND, Absence.model_validate(row))


@router.put("/{absence_id}", response_model=SuccessEnvelope[Absence])
async def update_absence(
    absence_id: int,
    request: UpdateAbsenceRequest,
    ctx: CurrentContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    await _get_absence(store, absence_id, ctx)

    updated = await store.update(
        EntityKind.absence, absence_id, request.model_dump(exclude_none=True)
    )
    if updated is None:
        raise NotFound(ErrorMessages.ABSENCE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ABSENCE_UPDATE))

    return envelope.success(SuccessMessages.ABSENCE_UPDATE, Absence.model_validate(updated))


@router.delete("/{absence_id}", response_model=SuccessEnvelope[Absence])
async def delete_absence(
    absence_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await _get_absence(store, absence_id, ctx)

    await store.delete(EntityKind.absence, absence_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ABSENCE_DELETE))

    return envelope.success(SuccessMessages.ABSENCE_DELETE, Absence.model_validate(row))
