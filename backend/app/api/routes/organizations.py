"""Organization endpoints - sign-up, login and account management."""

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, MailerDep, StoreDep, TokensDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, BadRequest, Forbidden, OrganizationNotFound
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.db.repositories import EntityKind
from backend.app.models.organization import Organization, OrganizationLogin
from backend.app.notifications.mailer import account_details_message
from backend.app.security.passwords import generate_random_password, hash_password, verify_password
from backend.app.security.tokens import TokenSubject
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/organizations", tags=["organizations"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CreateOrganizationRequest(BaseModel):
    """Request body for POST /api/organizations."""

    name: str = Field(..., min_length=1, max_length=200)
    business_email: str = Field(..., pattern=EMAIL_PATTERN)
    company_name: str | None = Field(None, max_length=200)
    phone_number: str | None = Field(None, max_length=50)


class OrganizationLoginRequest(BaseModel):
    """Request body for POST /api/organizations/login."""

    business_email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateOrganizationRequest(BaseModel):
    """Request body for PUT /api/organizations/{id}."""

    name: str | None = Field(None, min_length=1, max_length=200)
    business_email: str | None = Field(None, pattern=EMAIL_PATTERN)
    company_name: str | None = Field(None, max_length=200)
    phone_number: str | None = Field(None, max_length=50)


def _organization_audit(name: str, message: str, status_code: int = status.HTTP_200_OK) -> AuditEntry:
    # Unauthenticated organization routes attribute the action to the organization itself
    return AuditEntry(
        level="info",
        message=message,
        success=True,
        user_type="organization",
        owner=name,
        status=status_code,
    )


@router.post(
    "",
    response_model=SuccessEnvelope[Organization],
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    request: CreateOrganizationRequest,
    store: StoreDep,
    audit: AuditDep,
    mailer: MailerDep,
) -> JSONResponse:
    """Register an organization and mail it a generated password.

    Returns:
        201 with the created organization; 400 if the business email is taken
    """
    existing = await store.find_one(EntityKind.organization, business_email=request.business_email)
    if existing is not None:
        raise AlreadyExists(ErrorMessages.ORGANIZATION_EXISTS)

    password = generate_random_password()
    password_hash = await asyncio.to_thread(hash_password, password)
    row = await store.create(
        EntityKind.organization, {**request.model_dump(), "password_hash": password_hash}
    )

    await mailer.send(account_details_message(request.business_email, password))
    await audit.submit(
        _organization_audit(row["name"], SuccessMessages.ORGANIZATION_CREATE, status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.ORGANIZATION_CREATE,
        Organization.model_validate(row),
        status.HTTP_201_CREATED,
    )


@router.post("/login", response_model=SuccessEnvelope[OrganizationLogin])
async def login_organization(
    request: OrganizationLoginRequest,
    store: StoreDep,
    tokens: TokensDep,
    audit: AuditDep,
) -> JSONResponse:
    """Check credentials and issue an organization token.

    The token and its expiry are stored on the organization row for
    reference only; requests are authorized from the token alone.
    """
    row = await store.find_one(EntityKind.organization, business_email=request.business_email)
    if row is None:
        raise OrganizationNotFound()

    if not await asyncio.to_thread(verify_password, request.password, row["password_hash"]):
        raise BadRequest(ErrorMessages.ORGANIZATION_INVALID_CREDENTIALS)

    issued = tokens.issue(TokenSubject.organization(row["id"]))
    await store.update(
        EntityKind.organization,
        row["id"],
        {"token": issued.token, "token_expires_at": issued.expires_at},
    )

    await audit.submit(_organization_audit(row["name"], SuccessMessages.ORGANIZATION_LOGIN))

    return envelope.success(
        SuccessMessages.ORGANIZATION_LOGIN,
        OrganizationLogin(
            business_email=row["business_email"],
            token=issued.token,
            phone_number=row.get("phone_number"),
            company_name=row.get("company_name"),
        ),
    )


@router.get("", response_model=SuccessEnvelope[list[Organization]])
async def list_organizations(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    """List all organizations."""
    rows = await store.list(EntityKind.organization)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ORGANIZATION_ALL_FOUND))

    return envelope.success(
        SuccessMessages.ORGANIZATION_ALL_FOUND,
        [Organization.model_validate(row) for row in rows],
    )


@router.get("/{organization_id}", response_model=SuccessEnvelope[Organization])
async def get_organization(
    organization_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Get an organization by id."""
    row = await store.get(EntityKind.organization, organization_id)
    if row is None:
        raise OrganizationNotFound()

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ORGANIZATION_FOUND))

    return envelope.success(SuccessMessages.ORGANIZATION_FOUND, Organization.model_validate(row))


@router.put("/{organization_id}", response_model=SuccessEnvelope[Organization])
async def update_organization(
    organization_id: int,
    request: UpdateOrganizationRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
) -> JSONResponse:
    """Update the caller's own organization."""
    if organization_id != ctx.organization_id:
        raise Forbidden()

    values = request.model_dump(exclude_none=True)
    if "business_email" in values:
        clash = await store.find_one(EntityKind.organization, business_email=values["business_email"])
        if clash is not None and clash["id"] != organization_id:
            raise AlreadyExists(ErrorMessages.ORGANIZATION_EXISTS)

    row = await store.update(EntityKind.organization, organization_id, values)
    if row is None:
        raise OrganizationNotFound()

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ORGANIZATION_UPDATE))

    return envelope.success(SuccessMessages.ORGANIZATION_UPDATE, Organization.model_validate(row))


@router.delete("/{organization_id}", response_model=SuccessEnvelope[Organization])
async def delete_organization(
    organization_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Delete the caller's own organization and everything it owns."""
    if organization_id != ctx.organization_id:
        raise Forbidden()

    row = await store.delete(EntityKind.organization, organization_id)
    if row is None:
        raise OrganizationNotFound()

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.ORGANIZATION_DELETE))

    return envelope.success(SuccessMessages.ORGANIZATION_DELETE, Organization.model_validate(row))
