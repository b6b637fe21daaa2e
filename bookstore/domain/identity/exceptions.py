"""Identity domain exceptions."""

from bookstore.domain.common.exceptions import DomainError


class InvalidCredentialsError(DomainError):
    """Raised when authentication fails due to invalid credentials."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")
