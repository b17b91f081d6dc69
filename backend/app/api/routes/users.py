"""User credential endpoints - registration and login of profiles."""

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.app.api import envelope
from backend.app.api.auth import CurrentContext, OrganizationContext
from backend.app.api.deps import AuditDep, MailerDep, StoreDep, TokensDep
from backend.app.api.envelope import SuccessEnvelope
from backend.app.api.errors import AlreadyExists, BadRequest, NotFound, UserNotFound
from backend.app.api.messages import ErrorMessages, SuccessMessages
from backend.app.api.routes.organizations import EMAIL_PATTERN
from backend.app.db.queries import get_scoped, get_scoped_credential, list_scoped_credentials
from backend.app.db.repositories import EntityKind
from backend.app.models.profile import UserCredential, UserLogin
from backend.app.notifications.mailer import account_details_message
from backend.app.security.passwords import generate_random_password, hash_password, verify_password
from backend.app.security.tokens import TokenSubject
from backend.app.utils.logging import AuditEntry

router = APIRouter(prefix="/api/user", tags=["users"])


class RegisterUserRequest(BaseModel):
    """Request body for POST /api/user/register."""

    profile_id: int
    email: str = Field(..., pattern=EMAIL_PATTERN)


class UserLoginRequest(BaseModel):
    """Request body for POST /api/user/login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateUserRequest(BaseModel):
    """Request body for PUT /api/user/{id}."""

    email: str | None = Field(None, pattern=EMAIL_PATTERN)
    reset_password: bool = False


@router.post(
    "/register",
    response_model=SuccessEnvelope[UserCredential],
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    request: RegisterUserRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
    mailer: MailerDep,
) -> JSONResponse:
    """Create login credentials for a profile and mail the password.

    Returns:
        201 with the credential; 404 if the profile is not in the caller's
        organization; 400 if the email or profile already has credentials
    """
    profile = await get_scoped(store, EntityKind.profile, request.profile_id, ctx)
    if profile is None:
        raise NotFound(ErrorMessages.PROFILE_NOT_FOUND)

    if (
        await store.find_one(EntityKind.user_credential, email=request.email) is not None
        or await store.find_one(EntityKind.user_credential, profile_id=request.profile_id) is not None
    ):
        raise AlreadyExists(ErrorMessages.USER_EMAIL_EXISTS)

    password = generate_random_password()
    row = await store.create(
        EntityKind.user_credential,
        {
            "email": request.email,
            "profile_id": request.profile_id,
            "password_hash": await asyncio.to_thread(hash_password, password),
        },
    )

    await mailer.send(account_details_message(request.email, password))
    await audit.submit(
        AuditEntry.for_context(ctx, SuccessMessages.USER_SIGN_UP, status=status.HTTP_201_CREATED)
    )

    return envelope.success(
        SuccessMessages.USER_SIGN_UP,
        UserCredential.model_validate(row),
        status.HTTP_201_CREATED,
    )


@router.post("/login", response_model=SuccessEnvelope[UserLogin])
async def login_user(
    request: UserLoginRequest,
    store: StoreDep,
    tokens: TokensDep,
    audit: AuditDep,
) -> JSONResponse:
    """Check credentials and issue a user token."""
    row = await store.find_one(EntityKind.user_credential, email=request.email)
    if row is None:
        raise UserNotFound()

    if not await asyncio.to_thread(verify_password, request.password, row["password_hash"]):
        raise BadRequest(ErrorMessages.USER_INCORRECT_PASSWORD)

    issued = tokens.issue(TokenSubject.user(row["id"]))
    await store.update(
        EntityKind.user_credential,
        row["id"],
        {"token": issued.token, "token_expires_at": issued.expires_at},
    )

    profile = await store.get(EntityKind.profile, row["profile_id"])
    owner = f"{profile['first_name']} {profile['last_name']}" if profile else row["email"]
    await audit.submit(
        AuditEntry(
            level="info",
            message=SuccessMessages.USER_LOGIN,
            success=True,
            user_type="profile",
            owner=owner,
            status=status.HTTP_200_OK,
        )
    )

    return envelope.success(SuccessMessages.USER_LOGIN, UserLogin(token=issued.token))


@router.get("", response_model=SuccessEnvelope[list[UserCredential]])
async def list_users(ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    """List credentials of the caller's organization."""
    rows = await list_scoped_credentials(store, ctx)

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.USER_ALL_FOUND))

    return envelope.success(
        SuccessMessages.USER_ALL_FOUND,
        [UserCredential.model_validate(row) for row in rows],
    )


@router.get("/{user_id}", response_model=SuccessEnvelope[UserCredential])
async def get_user(user_id: int, ctx: CurrentContext, store: StoreDep, audit: AuditDep) -> JSONResponse:
    """Get a credential by id."""
    row = await get_scoped_credential(store, user_id, ctx)
    if row is None:
        raise UserNotFound()

    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.USER_FOUND))

    return envelope.success(SuccessMessages.USER_FOUND, UserCredential.model_validate(row))


@router.put("/{user_id}", response_model=SuccessEnvelope[UserCredential])
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    ctx: OrganizationContext,
    store: StoreDep,
    audit: AuditDep,
    mailer: MailerDep,
) -> JSONResponse:
    """Change a credential's email and/or reset its password.

    A reset generates a new password and mails it to the (new) email.
    """
    row = await get_scoped_credential(store, user_id, ctx)
    if row is None:
        raise UserNotFound()

    values: dict[str, str] = {}
    if request.email is not None and request.email != row["email"]:
        if await store.find_one(EntityKind.user_credential, email=request.email) is not None:
            raise AlreadyExists(ErrorMessages.USER_EMAIL_EXISTS)
        values["email"] = request.email

    password = None
    if request.reset_password:
        password = generate_random_password()
        values["password_hash"] = await asyncio.to_thread(hash_password, password)

    updated = await store.update(EntityKind.user_credential, user_id, values)
    if updated is None:
        raise UserNotFound()

    if password is not None:
        await mailer.send(account_details_message(updated["email"], password))
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.USER_UPDATE))

    return envelope.success(SuccessMessages.USER_UPDATE, UserCredential.model_validate(updated))


@router.delete("/{user_id}", response_model=SuccessEnvelope[UserCredential])
async def delete_user(
    user_id: int, ctx: OrganizationContext, store: StoreDep, audit: AuditDep
) -> JSONResponse:
    """Delete a credential; tokens issued for it stop resolving."""
    row = await get_scoped_credential(store, user_id, ctx)
    if row is None:
        raise UserNotFound()

    await store.delete(EntityKind.user_credential, user_id)
    await audit.submit(AuditEntry.for_context(ctx, SuccessMessages.USER_DELETE))

    return envelope.success(SuccessMessages.USER_DELETE, None)
