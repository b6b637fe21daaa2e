"""Access token creation and verification."""

import secrets
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import jwt
from jwt import InvalidTokenError

from bookstore.application.identity.protocols import IssuedToken
from bookstore.config import get_settings
from bookstore.domain.identity import Principal, UserAccount
from bookstore.domain.identity.entities.user_account import ROLE_PREFIX
from bookstore.domain.identity.value_objects import SCOPE_PREFIX

ALGORITHM = "HS256"


@lru_cache
def get_signing_key() -> str:
    """
    Signing key for access tokens.

    Without a configured SECRET_KEY a random key is generated per
    process, so issued tokens stop working after a restart.
    """
    return get_settings().SECRET_KEY or secrets.token_urlsafe(64)


def create_access_token(account: UserAccount, now: datetime | None = None) -> IssuedToken:
    """Create a signed access token carrying the account's roles."""
    settings = get_settings()
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS)
    claims = {
        "iss": settings.JWT_ISSUER,
        "iat": issued_at,
        "exp": expires_at,
        "sub": account.username,
        "roles": list(account.roles),
    }
    token = jwt.encode(claims, get_signing_key(), algorithm=ALGORITHM)
    return IssuedToken(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
        expires_at=expires_at,
    )


def verify_access_token(token: str) -> Principal | None:
    """Verify signature, expiry and issuer; return the caller or None."""
    try:
        payload = jwt.decode(
            token,
            get_signing_key(),
            algorithms=[ALGORITHM],
            issuer=get_settings().JWT_ISSUER,
            options={"require": ["exp", "sub"]},
        )
    except (InvalidTokenError, ValueError):
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    return Principal(username=str(subject), authorities=frozenset(extract_authorities(payload)))


def extract_authorities(claims: Mapping[str, Any]) -> list[str]:
    """
    Derive granted authorities from token claims.

    The ``roles`` claim (a list or a comma separated string) maps to
    ``ROLE_*`` authorities. Tokens without roles fall back to the
    space separated ``scope`` claim, mapped to ``SCOPE_*``.
    """
    roles = claims.get("roles")
    if isinstance(roles, str):
        roles = roles.split(",")
    if isinstance(roles, list | tuple):
        names = [str(r).strip() for r in roles if str(r).strip()]
        if names:
            return [f"{ROLE_PREFIX}{name}" for name in names]

    scope = claims.get("scope")
    if isinstance(scope, str) and scope.strip():
        return [f"{SCOPE_PREFIX}{s}" for s in scope.split()]

    return []
