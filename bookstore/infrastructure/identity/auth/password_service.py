"""Password hashing and verification service."""

from functools import lru_cache

from pwdlib import PasswordHash

from bookstore.config import get_settings

password_hash = PasswordHash.recommended()


def _pepper() -> str:
    return get_settings().PASSWORD_PEPPER


def hash_password(plain_password: str) -> str:
    """Hash a plain password for storage with pepper."""
    return password_hash.hash(plain_password + _pepper())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return password_hash.verify(plain_password + _pepper(), hashed_password)


@lru_cache
def get_dummy_hash() -> str:
    """
    Get a real hash of a throwaway password.

    Verifying against it costs the same as verifying a real account, so
    unknown usernames cannot be told apart by response time.
    """
    return password_hash.hash("dummy-password-for-timing")
