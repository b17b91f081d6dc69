"""Signed identity tokens (HS256 JWT).

A token names exactly one subject: an organization (`organizationId`) or a
user credential (`userId`). Expiry is the only invalidation mechanism.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TOKEN_ALGORITHM = "HS256"
ORGANIZATION_CLAIM = "organizationId"
USER_CLAIM = "userId"


@dataclass(frozen=True)
class TokenSubject:
    """Subject claim carried by an identity token."""

    organization_id: int | None = None
    user_id: int | None = None

    @classmethod
    def organization(cls, organization_id: int) -> "TokenSubject":
        return cls(organization_id=organization_id)

    @classmethod
    def user(cls, user_id: int) -> "TokenSubject":
        return cls(user_id=user_id)


@dataclass(frozen=True)
class IssuedToken:
    """Encoded token and its expiry."""

    token: str
    expires_at: datetime


class TokenService:
    """Issues and verifies identity tokens against a shared secret."""

    def __init__(self, secret: str, ttl_seconds: int = 3600) -> None:
        """Initialize token service.

        Args:
            secret: HMAC secret (JWT_SECRET_KEY)
            ttl_seconds: Validity window of issued tokens (default 1 hour)

        Raises:
            ValueError: If the secret is empty or the TTL is not positive
        """
        if not secret:
            raise ValueError("JWT_SECRET_KEY must be set to sign identity tokens.")
        if ttl_seconds <= 0:
            raise ValueError("token_ttl_seconds must be positive")

        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)

    def issue(self, subject: TokenSubject, now: datetime | None = None) -> IssuedToken:
        """Issue a token for exactly one subject.

        Raises:
            ValueError: If the subject names neither or both identities
        """
        if (subject.organization_id is None) == (subject.user_id is None):
            raise ValueError("Token subject must carry exactly one of organizationId/userId")

        if now is None:
            now = datetime.now(timezone.utc)
        expires_at = now + self._ttl

        claims: dict[str, Any] = {"iat": now, "exp": expires_at}
        if subject.organization_id is not None:
            claims[ORGANIZATION_CLAIM] = subject.organization_id
        else:
            claims[USER_CLAIM] = subject.user_id

        token = jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenSubject:
        """Verify signature and expiry and decode the subject.

        A verified token without any subject claim decodes to an empty
        TokenSubject; callers decide how to treat it.

        Raises:
            jwt.InvalidTokenError: On malformed, expired or tampered tokens,
                or when a subject claim is not an integer id
        """
        claims = jwt.decode(
            token,
            self._secret,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["exp"]},
        )

        return TokenSubject(
            organization_id=_id_claim(claims, ORGANIZATION_CLAIM),
            user_id=_id_claim(claims, USER_CLAIM),
        )


def _id_claim(claims: dict[str, Any], name: str) -> int | None:
    value = claims.get(name)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise jwt.InvalidTokenError(f"Claim {name} must be an integer id")
    return value
