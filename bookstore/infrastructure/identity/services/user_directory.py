"""Accounts defined in configuration rather than in the database."""

import structlog

from bookstore.config import Settings
from bookstore.domain.identity import UserAccount
from bookstore.infrastructure.identity.auth.password_service import hash_password

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"


class InMemoryUserDirectory:
    """
    Holds the administrator and the regular user account from settings.

    Passwords are hashed once at construction; plain passwords are not kept.
    """

    def __init__(self, settings: Settings) -> None:
        accounts = [
            UserAccount(
                username=settings.ADMIN_USERNAME,
                hashed_password=hash_password(settings.ADMIN_PASSWORD),
                roles=(ADMIN_ROLE,),
            ),
            UserAccount(
                username=settings.USER_USERNAME,
                hashed_password=hash_password(settings.USER_PASSWORD),
                roles=(USER_ROLE,),
            ),
        ]
        self._accounts = {account.username: account for account in accounts}
        logger.debug("user_directory_loaded", usernames=sorted(self._accounts))

    def find_by_username(self, username: str) -> UserAccount | None:
        return self._accounts.get(username)
