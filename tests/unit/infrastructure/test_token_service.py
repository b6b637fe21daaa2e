"""Tests for access token creation and verification."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from bookstore.config import get_settings
from bookstore.domain.identity import UserAccount
from bookstore.infrastructure.identity.auth.token_service import (
    ALGORITHM,
    create_access_token,
    extract_authorities,
    get_signing_key,
    verify_access_token,
)


@pytest.fixture
def account() -> UserAccount:
    return UserAccount(username="admin", hashed_password="x", roles=("ADMIN",))


def test_round_trip_carries_roles(account: UserAccount) -> None:
    issued = create_access_token(account)
    principal = verify_access_token(issued.access_token)

    assert principal is not None
    assert principal.username == "admin"
    assert principal.authorities == frozenset({"ROLE_ADMIN"})
    assert issued.expires_in == get_settings().ACCESS_TOKEN_EXPIRE_SECONDS


def test_claims(account: UserAccount) -> None:
    issued = create_access_token(account)
    claims = jwt.decode(issued.access_token, get_signing_key(), algorithms=[ALGORITHM])

    assert claims["iss"] == "bookstore-api"
    assert claims["sub"] == "admin"
    assert claims["roles"] == ["ADMIN"]
    assert claims["exp"] > claims["iat"]


def test_expired_token_rejected(account: UserAccount) -> None:
    issued = create_access_token(account, now=datetime.now(UTC) - timedelta(days=1))
    assert verify_access_token(issued.access_token) is None


def test_foreign_signature_rejected() -> None:
    token = jwt.encode(
        {"sub": "admin", "iss": "bookstore-api", "exp": datetime.now(UTC) + timedelta(hours=1)},
        "not-the-signing-key",
        algorithm=ALGORITHM,
    )
    assert verify_access_token(token) is None


def test_wrong_issuer_rejected() -> None:
    token = jwt.encode(
        {"sub": "admin", "iss": "someone-else", "exp": datetime.now(UTC) + timedelta(hours=1)},
        get_signing_key(),
        algorithm=ALGORITHM,
    )
    assert verify_access_token(token) is None


def test_garbage_rejected() -> None:
    assert verify_access_token("not-a-jwt") is None


class TestExtractAuthorities:
    def test_roles_list(self) -> None:
        assert extract_authorities({"roles": ["ADMIN", "USER"]}) == ["ROLE_ADMIN", "ROLE_USER"]

    def test_roles_comma_separated(self) -> None:
        assert extract_authorities({"roles": "ADMIN, USER"}) == ["ROLE_ADMIN", "ROLE_USER"]

    def test_scope_used_without_roles(self) -> None:
        assert extract_authorities({"scope": "books.read books.write"}) == [
            "SCOPE_books.read",
            "SCOPE_books.write",
        ]

    def test_roles_win_over_scope(self) -> None:
        assert extract_authorities({"roles": ["USER"], "scope": "books.read"}) == ["ROLE_USER"]

    def test_nothing_granted(self) -> None:
        assert extract_authorities({}) == []
        assert extract_authorities({"roles": []}) == []
