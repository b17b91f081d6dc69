"""Role endpoints."""

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
from backend.app.db.context import RequestContext
from backend.app.db.queries import list_scoped
from backend.app.db.repositories import EntityKind, EntityStore
from backend.app.models.workforce import Role
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/role", tags=["roles"])


class RoleRequest(BaseModel):
    """Request body for POST /api/role and PUT /api/role/{id}."""

    role_type: str = Field(..., min_length=1, max_length=100)


async def _ensure_unique_type(
    store: EntityStore, ctx: RequestContext, role_type: str, role_id: int | None = None
) -> None:
    clash = await store.find_one(
        EntityKind.role, organization_id=ctx.organization_id, role_type=role_type
    )
    if clash is not None and clash["id"] != role_id:
        raise AlreadyExists(ErrorMessages.ROLE_TYPE_EXISTS)


@router.post("", response_model=SuccessEnvelope[Role], status_code=status.HTTP_201_CREATED)
async def create_role(
    request: RoleRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a role type.

    Returns:
        201 with the role; 400 if the organization already has this role type
    """
    await _ensure_unique_type(store, ctx, request.role_type)

    row = await store.create(
        EntityKind.role, {"organization_id": ctx.organization_id, "role_type": request.role_type}
    )

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.ROLE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(SuccessMessages.ROLE_CREATE, Role.model_validate(row), status.HTTP_201_CREATED)


@router.get("", response_model=SuccessEnvelope[list[Role]])
async def list_roles(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    rows = await list_scoped(store, EntityKind.role, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ROLE_ALL_FOUND))

    return envelope.success(SuccessMessages.ROLE_ALL_FOUND, [Role.model_validate(row) for row in rows])


@router.get("/{role_id}", response_model=SuccessEnvelope[Role])
async def get_role(role_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    row = await get_owned(store, EntityKind.role, role_id, ctx, ErrorMessages.ROLE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ROLE_FOUND))

    return envelope.success(SuccessMessages.ROLE_FOUND, Role.model_validate(row))


@router.put("/{role_id}", response_model=SuccessEnvelope[Role])
async def update_role(
    role_id: int,
    request: RoleRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    await get_owned(store, EntityKind.role, role_id, ctx, ErrorMessages.ROLE_NOT_FOUND)
    await _ensure_unique_type(store, ctx, request.role_type, role_id)

    updated = await store.update(EntityKind.role, role_id, {"role_type": request.role_type})
    if updated is None:
        raise NotFound(ErrorMessages.ROLE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ROLE_UPDATE))

    return envelope.success(SuccessMessages.ROLE_UPDATE, Role.model_validate(updated))


@router.delete("/{role_id}", response_model=SuccessEnvelope[Role])
async def delete_role(
    role_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    row = await get_owned(store, EntityKind.role, role_id, ctx, ErrorMessages.ROLE_NOT_FOUND)

    await store.delete(EntityKind.role, role_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ROLE_DELETE))

    return envelope.success(SuccessMessages.ROLE_DELETE, Role.model_validate(row))


@router.put("/{role_id}/{profile_id}", response_model=SuccessEnvelope[Role])
async def assign_role(
    role_id: int,
    profile_id: int,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Give a role to a profile; 400 if the profile already has it."""
    row = await get_owned(store, EntityKind.role, role_id, ctx, ErrorMessages.ROLE_NOT_FOUND)
    await get_owned_profile(store, profile_id, ctx)
    if row.get("profile_id") == profile_id:
        raise AlreadyExists(ErrorMessages.ROLE_ALREADY_ASSIGNED)

    updated = await store.update(EntityKind.role, role_id, {"profile_id": profile_id})
    if updated is None:
        raise NotFound(ErrorMessages.ROLE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ROLE_ASSIGNED))

    return envelope.success(SuccessMessages.ROLE_ASSIGNED, Role.model_validate(updated))
