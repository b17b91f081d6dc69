"""Location endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.context import RequestContext
from backend.app.db.queries import get_scoped, list_scoped
from backend.app.db.repositories import EntityKind, EntityStore
from backend.app.models.client import Location
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/location", tags=["locations"])


class LocationFields(BaseModel):
    client_id: int | None = None
    street_address: str | None = None
    city: str | None = None
    post_code: str | None = None
    state: str | None = None
    country: str | None = None
    directions: str | None = None


class CreateLocationRequest(LocationFields):
    """Request body for POST /api/location."""

    location_name: str = Field(..., min_length=1, max_length=200)


class UpdateLocationRequest(LocationFields):
    """Request body for PUT /api/location/{id}."""

    location_name: str | None = Field(None, min_length=1, max_length=200)


async def _check_client(store: EntityStore, client_id: int | None, ctx: RequestContext) -> None:
    if client_id is None:
        return
    if await get_scoped(store, EntityKind.client, client_id, ctx) is None:
        raise NotFound(ErrorMessages.CLIENT_NOT_FOUND)


async def _check_unique_name(
    store: EntityStore,
    ctx: RequestContext,
    location_name: str,
    client_id: int | None,
    location_id: int | None = None,
) -> None:
    # Names are unique per client within an organization
    clash = await store.find_one(
        EntityKind.location,
        organization_id=ctx.organization_id,
        client_id=client_id,
        location_name=location_name,
    )
    if clash is not None and clash["id"] != location_id:
        raise AlreadyExists(ErrorMessages.LOCATION_EXISTS)


@router.post("", response_model=SuccessEnvelope[Location], status_code=status.HTTP_201_CREATED)
async def create_location(
    request: CreateLocationRequest, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a location.

    Returns:
        201 with the location; 404 if client_id is not a client of the
        caller's organization; 400 if the name is taken for that client
    """
    await _check_client(store, request.client_id, ctx)
    await _check_unique_name(store, ctx, request.location_name, request.client_id)

    values = request.model_dump(exclude_none=True)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.location, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.LOCATION_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.LOCATION_CREATE, Location.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Location]])
async def list_locations(
    ctx: CurrentContext, store: StoreDep, audit: AuditDep, client_id: int | None = None
) -> JSONResponse:
    """List locations, optionally only those of one client."""
    filters = {} if client_id is None else {"client_id": client_id}
    rows = await list_scoped(store, EntityKind.location, ctx, **filters)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.LOCATION_ALL_FOUND))

    return envelope.success(
        SuccessMessages.LOCATION_ALL_FOUND, [Location.model_validate(row) for row in rows]
    )


@router.get("/{location_id}", response_model=SuccessEnvelope[Location])
async def get_location(
    location_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_scoped(store, EntityKind.location, location_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.LOCATION_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.LOCATION_FOUND))

    return envelope.success(SuccessMessages.LOCATION_FOUND, Location.model_validate(row))


@router.put("/{location_id}", response_model=SuccessEnvelope[Location])
async def update_location(
    location_id: int,
    request: UpdateLocationRequest,
    ctx: CurrentContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    row = await get_scoped(store, EntityKind.location, location_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.LOCATION_NOT_FOUND)

    # client_id may be cleared with an explicit null
    values = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key == "client_id"
    }
    client_id = values.get("client_id", row.get("client_id"))
    await _check_client(store, values.get("client_id"), ctx)
    if "location_name" in values or "client_id" in values:
        await _check_unique_name(
            store,
            ctx,
            values.get("location_name") or row["location_name"],
            client_id,
            location_id,
        )

    updated = await store.update(EntityKind.location, location_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.LOCATION_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.LOCATION_UPDATE))

    return envelope.success(SuccessMessages.LOCATION_UPDATE, Location.model_validate(updated))


@router.delete("/{location_id}", response_model=SuccessEnvelope[Location])
async def delete_location(
    location_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_scoped(store, EntityKind.location, location_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.LOCATION_NOT_FOUND)

    await store.delete(EntityKind.location, location_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.LOCATION_DELETE))

    return envelope.success(SuccessMessages.LOCATION_DELETE, Location.model_validate(row))
