"""Adapters exposing the auth helper modules through the application protocols."""

from bookstore.application.identity.protocols import IssuedToken
from bookstore.domain.identity import Principal, UserAccount
from bookstore.infrastructure.identity.auth import password_service, token_service


class PasswordServiceAdapter:
    """Adapter wrapping password service functions for DI."""

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return password_service.verify_password(plain_password, hashed_password)

    def get_dummy_hash(self) -> str:
        return password_service.get_dummy_hash()


class TokenServiceAdapter:
    """Adapter wrapping token service functions for DI."""

    def issue_access_token(self, account: UserAccount) -> IssuedToken:
        return token_service.create_access_token(account)

    def verify_access_token(self, token: str) -> Principal | None:
        return token_service.verify_access_token(token)
