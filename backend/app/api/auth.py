"""Bearer-token authorization dependency.

Every protected route depends on `get_current_context`. It runs before the
route handler and either returns the caller's RequestContext or raises an
ApiError, in which case the handler is never invoked.
"""

import logging
from typing import Annotated

import jwt
from fastapi import Depends, Header

from backend.app.api.deps import StoreDep, TokensDep
from backend.app.api.errors import (
    ApiError,
    Forbidden,
    InvalidToken,
    OrganizationNotFound,
    TokenNotFound,
    UserNotFound,
)
from backend.app.db.context import OrganizationIdentity, ProfileIdentity, RequestContext
from backend.app.db.repositories import EntityStore
from backend.app.security.tokens import TokenSubject
from backend.app.utils.metrics import metrics

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header.

    Raises:
        TokenNotFound: If the header is absent or malformed
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise TokenNotFound()

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise TokenNotFound()

    return token


async def resolve_identity(subject: TokenSubject, store: EntityStore) -> RequestContext:
    """Look up the token subject and build the request context.

    Args:
        subject: Verified token subject
        store: Entity store

    Returns:
        RequestContext with an organization or profile identity

    Raises:
        OrganizationNotFound: Organization subject missing from the store
        UserNotFound: User subject missing, profile missing, or no subject
    """
    if subject.organization_id is not None:
        organization = await store.find_organization_by_id(subject.organization_id)
        if organization is None:
            raise OrganizationNotFound()

        return RequestContext(
            identity=OrganizationIdentity(
                id=organization.id,
                name=organization.name,
                business_email=organization.business_email,
                company_name=organization.company_name,
                phone_number=organization.phone_number,
            )
        )

    if subject.user_id is not None:
        credential = await store.find_user_credential_by_id(subject.user_id)
        if credential is None or credential.profile is None:
            raise UserNotFound()

        profile = credential.profile
        return RequestContext(
            identity=ProfileIdentity(
                id=profile.id,
                first_name=profile.first_name,
                last_name=profile.last_name,
                organization_id=profile.organization_id,
                user_id=credential.id,
            )
        )

    raise UserNotFound()


async def get_current_context(
    store: StoreDep,
    tokens: TokensDep,
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Verify the bearer token and resolve the caller identity.

    Args:
        store: Entity store
        tokens: Token service
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        RequestContext for the caller

    Raises:
        TokenNotFound: 401, header absent or malformed
        InvalidToken: 498, signature/expiry/claim verification failed
        OrganizationNotFound: 404
        UserNotFound: 404
        ApiError: 500, store fault during lookup
    """
    try:
        token = extract_bearer_token(authorization)
    except TokenNotFound:
        metrics.inc_auth_failure("token_not_found")
        raise

    try:
        subject = tokens.verify(token)
    except jwt.InvalidTokenError as e:
        logger.info("Token verification failed: %s", type(e).__name__)
        metrics.inc_auth_failure("invalid_token")
        raise InvalidToken() from e

    try:
        return await resolve_identity(subject, store)
    except ApiError:
        metrics.inc_auth_failure("subject_not_found")
        raise
    except Exception as e:
        logger.exception("Identity lookup failed")
        metrics.inc_auth_failure("lookup_error")
        raise ApiError() from e


CurrentContext = Annotated[RequestContext, Depends(get_current_context)]


async def require_organization(ctx: CurrentContext) -> RequestContext:
    """Allow only organization callers.

    Raises:
        Forbidden: 403 for profile callers
    """
    if not ctx.is_organization:
        raise Forbidden()
    return ctx


OrganizationContext = Annotated[RequestContext, Depends(require_organization)]
