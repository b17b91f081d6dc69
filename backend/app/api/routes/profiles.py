"""Profile (employee) endpoints."""

from datetime import date

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, StoreDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, NotFound
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.queries import get_scoped, list_scoped
from backend.app.db.repositories import EntityKind
from backend.app.models.profile import Profile
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/profile", tags=["profiles"])


class ProfileFields(BaseModel):
    """Optional profile attributes shared by create and update."""

    employment_type: str | None = Field(None, max_length=50)
    contract_no: int | None = Field(None, ge=0)
    mobile_no: str | None = Field(None, max_length=50)
    street_name: str | None = None
    city: str | None = None
    post_code: str | None = None
    country: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    nationality: str | None = None
    is_access_to_staff_portal: bool | None = None
    is_active: bool | None = None


class CreateProfileRequest(ProfileFields):
    """Request body for POST /api/profile."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UpdateProfileRequest(ProfileFields):
    """Request body for PUT /api/profile/{id}."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)


async def _ensure_unique_contract(
    store: StoreDep, organization_id: int, contract_no: int | None, profile_id: int | None = None
) -> None:
    if contract_no is None:
        return
    clash = await store.find_one(
        EntityKind.profile, organization_id=organization_id, contract_no=contract_no
    )
    if clash is not None and clash["id"] != profile_id:
        raise AlreadyExists(ErrorMessages.PROFILE_EXISTS)


@router.post("", response_model=SuccessEnvelope[Profile], status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: CreateProfileRequest, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Create a profile in the caller's organization.

    Returns:
        201 with the profile; 400 if the contract number is already used
    """
    await _ensure_unique_contract(store, ctx.organization_id, request.contract_no)

    values = request.model_dump(exclude_none=True)
    values["organization_id"] = ctx.organization_id
    row = await store.create(EntityKind.profile, values)

    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.PROFILE_CREATE, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.PROFILE_CREATE, Profile.model_validate(row), status.HTTP_201_CREATED
    )


@router.get("", response_model=SuccessEnvelope[list[Profile]])
async def list_profiles(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    """List profiles of the caller's organization."""
    rows = await list_scoped(store, EntityKind.profile, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PROFILE_ALL_FOUND))

    return envelope.success(
        SuccessMessages.PROFILE_ALL_FOUND, [Profile.model_validate(row) for row in rows]
    )


@router.get("/{profile_id}", response_model=SuccessEnvelope[Profile])
async def get_profile(
    profile_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Get a profile by id."""
    row = await get_scoped(store, EntityKind.profile, profile_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PROFILE_FOUND))

    return envelope.success(SuccessMessages.PROFILE_FOUND, Profile.model_validate(row))


@router.put("/{profile_id}", response_model=SuccessEnvelope[Profile])
async def update_profile(
    profile_id: int,
    request: UpdateProfileRequest,
    ctx: CurrentContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Update a profile.

    Organizations may update any of their profiles; a profile caller may
    update only its own.
    """
    row = await get_scoped(store, EntityKind.profile, profile_id, ctx)
    if row is None or (not ctx.is_organization and ctx.identity.id != profile_id):
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)

    values = request.model_dump(exclude_none=True)
    await _ensure_unique_contract(store, ctx.organization_id, values.get("contract_no"), profile_id)

    updated = await store.update(EntityKind.profile, profile_id, values)
    if updated is None:
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PROFILE_UPDATE))

    return envelope.success(SuccessMessages.PROFILE_UPDATE, Profile.model_validate(updated))


@router.delete("/{profile_id}", response_model=SuccessEnvelope[Profile])
async def delete_profile(
    profile_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Delete a profile; its login credential goes with it."""
    row = await get_scoped(store, EntityKind.profile, profile_id, ctx)
    if row is None:
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)

    await store.delete(EntityKind.profile, profile_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.PROFILE_DELETE))

    return envelope.success(SuccessMessages.PROFILE_DELETE, Profile.model_validate(row))
