"""Geofence endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import NotFound
from backend.app.api.lookups import get_owned, get_owned_profile
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.workforce import Geofence
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/geofence", tags=["geofences"])


class CreateGeofenceRequest(BaseModel):
    """Request body for POST /api/geofence."""

    profile_id: int
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius: float = Field(..., gt=0)
    status: str = Field(..., min_length=1, max_length=50)


class UpdateGeofenceRequest(BaseModel):
    """Request body for PUT /api/geofence/{id}. The profile cannot change."""

    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    radius: float | None = Field(None, gt=0)
    status: str | None = Field(None, min_length=1, max_length=50)


@router.post("", response_model=SuccessEnvelope[Geofence], status_code=status.HTTP_201_CREATED)
async def create_geofence(
    request: CreateGeofenceRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    await get_owned_profile(store, request.profile_id, ctx)

    values = request.model_dump()
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.geofence, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.GEOFENCE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.GEOFENCE_CREATE, Geofence.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Geofence]])
async def list_geofences(
    ctx: CurrentContext, store: StoreDep, audit: AuditDep, profile_id: int | None = None
) -> JSONResponse:
    """List geofences, optionally only those of one profile."""
    filters = {} if profile_id is None else {"profile_id": profile_id}
    rows = await list_scoped(store, EntityKind.geofence, ctx, **filters)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.GEOFENCE_ALL_FOUND))

    return envelope.success(
        SuccessMessages.GEOFENCE_ALL_FOUND, [Geofence.model_validate(row) for row in rows]
    )


@router.get("/{geofence_id}", response_model=SuccessEnvelope[Geofence])
async def get_geofence(
    geofence_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.geofence, geofence_id, ctx, ErrorMessages.GEOFENCE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.GEOFENCE_FOUND))

    return envelope.success(SuccessMessages.GEOFENCE_FOUND, Geofence.model_validate(row))


@router.put("/{geofence_id}", response_model=SuccessEnvelope[Geofence])
async def update_geofence(
    geofence_id: int,
    request: UpdateGeofenceRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    await get_owned(store, EntityKind.geofence, geofence_id, ctx, ErrorMessages.GEOFENCE_NOT_FOUND)

    updated = await store.update(
        EntityKind.geofence, geofence_id, request.model_dump(exclude_none=True)
    )
    if updated is None:
        raise NotFound(ErrorMessages.GEOFENCE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.GEOFENCE_UPDATE))

    return envelope.success(SuccessMessages.GEOFENCE_UPDATE, Geofence.model_validate(updated))


@router.delete("/{geofence_id}", response_model=SuccessEnvelope[Geofence])
async def delete_geofence(
    geofence_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.geofence, geofence_id, ctx, ErrorMessages.GEOFENCE_NOT_FOUND)

    await store.delete(EntityKind.geofence, geofence_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.GEOFENCE_DELETE))

    return envelope.success(SuccessMessages.GEOFENCE_DELETE, Geofence.model_validate(row))
