"""Client endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.api.routes.organizations import EMAIL_PATTERN
from backend.app.db.queries import get_scoped, list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.client import Client
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/client", tags=["clients"])


class ClientFields(BaseModel):
    client_phone_number: str | None = Field(None, max_length=50)
    contact_person_name: str | None = None
    contact_person_email: str | None = Field(None, pattern=EMAIL_PATTERN)
    job_title: str | None = None
    reg_no: str | None = None
    vat_no: str | None = None
    website: str | None = None
    sectors: str | None = None
    address_line: str | None = None
    city: str | None = None
    post_code: str | None = None
    county: str | None = None
    country: str | None = None
    is_client_portal_access: bool | None = None


class CreateClientRequest(ClientFields):
    """Request body for POST /api/client."""

    client_name: str = Field(..., min_length=1, max_length=200)
    client_email: str = Field(..., pattern=EMAIL_PATTERN)


class UpdateClientRequest(ClientFields):
    """Request body for PUT /api/client/{id}."""

    client_name: str | None = Field(None, min_length=1, max_length=200)
    client_email: str | None = Field(None, pattern=EMAIL_PATTERN)


@router.post("", response_model=SuccessEnvelope[Client], status_code=status.HTTP_201_CREATED)
async def create_client(
    request: CreateClientRequest, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a client.

    Returns:
        201 with the client; 400 if the organization already has a client
        with this email
    """
    existing = await store.find_one(
        EntityKind.client, organization_id=ctx.organization_id, client_email=request.client_email
    )
    if existing is not None:
        raise AlreadyExists(ErrorMessages.CLIENT_EXISTS)

    values = request.model_dump(exclude_none=True)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.client, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.CLIENT_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.CLIENT_CREATE, Client.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Client]])
async def list_clients(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    rows = await list_scoped(store, EntityKind.client, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.CLIENT_ALL_FOUND))

    return envelope.success(
        SuccessMessages.CLIENT_ALL_FOUND, [Client.model_validate(row) for row in rows]
    )


@router.get("/{client_id}", response_model=SuccessEnvelope[Client])
async def get_client(
    client_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_scoped(store, EntityKind.client, client_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.CLIENT_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.CLIENT_FOUND))

    return envelope.success(SuccessMessages.CLIENT_FOUND, Client.model_validate(row))


@router.put("/{client_id}", response_model=SuccessEnvelope[Client])
async def update_client(
    client_id: int,
    request: UpdateClientRequest,
    ctx: CurrentContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    row = await get_scoped(store, EntityKind.client, client_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.CLIENT_NOT_FOUND)

    values = request.model_dump(exclude_none=True)
    if values.get("client_email") is not None:
        clash = await store.find_one(
            EntityKind.client,
            organization_id=ctx.organization_id,
            client_email=values["client_email"],
        )
        if clash is not None and clash["id"] != client_id:
            raise AlreadyExists(ErrorMessages.CLIENT_EXISTS)

    updated = await store.update(EntityKind.client, client_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.CLIENT_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.CLIENT_UPDATE))

    return envelope.success(SuccessMessages.CLIENT_UPDATE, Client.model_validate(updated))


@router.delete("/{client_id}", response_model=SuccessEnvelope[Client])
async def delete_client(
    client_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Delete a client; its locations are kept with client_id cleared."""
    row = await get_scoped(store, EntityKind.client, client_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.CLIENT_NOT_FOUND)

    await store.delete(EntityKind.client, client_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.CLIENT_DELETE))

    return envelope.success(SuccessMessages.CLIENT_DELETE, Client.model_validate(row))
