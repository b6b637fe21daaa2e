from .password_service import PasswordServiceProtocol
from .token_service import IssuedToken, TokenServiceProtocol
from .user_directory import UserDirectoryProtocol

__all__ = [
    "IssuedToken",
    "PasswordServiceProtocol",
    "TokenServiceProtocol",
    "UserDirectoryProtocol",
]
