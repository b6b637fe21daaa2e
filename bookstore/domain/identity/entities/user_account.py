from dataclasses import dataclass

from bookstore.domain.common.exceptions import ValidationError

ROLE_PREFIX = "ROLE_"


@dataclass(frozen=True)
class UserAccount:
    """
    A configured account that may log in.

    Accounts are identified by username; there is no user table, the
    directory of accounts comes from configuration.
    """

    username: str
    hashed_password: str
    roles: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise ValidationError("Username is required", field="username")
        if not self.roles:
            raise ValidationError("An account needs at least one role", field="roles")

    @property
    def authorities(self) -> list[str]:
        return [f"{ROLE_PREFIX}{role}" for role in self.roles]
