from .adapters import PasswordServiceAdapter, TokenServiceAdapter
from .user_directory import ADMIN_ROLE, USER_ROLE, InMemoryUserDirectory

__all__ = [
    "ADMIN_ROLE",
    "USER_ROLE",
    "InMemoryUserDirectory",
    "PasswordServiceAdapter",
    "TokenServiceAdapter",
]
