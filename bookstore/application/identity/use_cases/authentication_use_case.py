"""Use case for authentication operations."""

from dataclasses import dataclass

import structlog

from bookstore.application.identity.protocols import (
    IssuedToken,
    PasswordServiceProtocol,
    TokenServiceProtocol,
    UserDirectoryProtocol,
)
from bookstore.domain.identity import InvalidCredentialsError, Principal, UserAccount

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    account: UserAccount
    token: IssuedToken


class AuthenticationUseCase:
    """Use case for authentication operations."""

    def __init__(
        self,
        user_directory: UserDirectoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_directory = user_directory
        self.password_service = password_service
        self.token_service = token_service

    def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate with username and password and issue an access token.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        account = self.verify_credentials(username, password)
        token = self.token_service.issue_access_token(account)

        logger.info("user_authenticated", username=account.username, roles=list(account.roles))

        return LoginResult(account=account, token=token)

    def verify_credentials(self, username: str, password: str) -> UserAccount:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        account = self.user_directory.find_by_username(username)

        # Unknown users still pay for a hash verification so timing does not leak them
        if account is None:
            self.password_service.verify_password(password, self.password_service.get_dummy_hash())
            logger.warning("authentication_failed", username=username)
            raise InvalidCredentialsError

        if not self.password_service.verify_password(password, account.hashed_password):
            logger.warning("authentication_failed", username=username)
            raise InvalidCredentialsError

        return account

    def authenticate_basic(self, username: str, password: str) -> Principal:
        """
        Resolve HTTP Basic credentials to a principal.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        account = self.verify_credentials(username, password)
        return Principal.from_roles(account.username, account.roles)

    def authenticate_token(self, token: str) -> Principal:
        """
        Resolve a bearer token to a principal.

        Raises:
            InvalidCredentialsError: If the token is invalid or expired
        """
        principal = self.token_service.verify_access_token(token)
        if principal is None:
            raise InvalidCredentialsError
        return principal
