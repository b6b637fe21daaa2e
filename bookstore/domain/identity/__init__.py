"""Identity domain layer."""

from bookstore.domain.identity.entities.user_account import UserAccount
from bookstore.domain.identity.exceptions import InvalidCredentialsError
from bookstore.domain.identity.value_objects import Principal

__all__ = [
    "InvalidCredentialsError",
    "Principal",
    "UserAccount",
]
