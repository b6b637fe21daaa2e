"""Identity value objects."""

from dataclasses import dataclass

from bookstore.domain.common.value_object import ValueObject
from bookstore.domain.identity.entities.user_account import ROLE_PREFIX

SCOPE_PREFIX = "SCOPE_"


@dataclass(frozen=True)
class Principal(ValueObject):
    """
    The authenticated caller of a request.

    Authorities are the granted permissions in their prefixed form, e.g.
    ``ROLE_ADMIN`` for a role or ``SCOPE_books.read`` for an OAuth scope.
    """

    username: str
    authorities: frozenset[str]

    def has_any_role(self, *roles: str) -> bool:
        """Whether any of the given bare role names was granted."""
        return any(f"{ROLE_PREFIX}{role}" in self.authorities for role in roles)

    @classmethod
    def from_roles(cls, username: str, roles: list[str] | tuple[str, ...]) -> "Principal":
        return cls(username=username, authorities=frozenset(f"{ROLE_PREFIX}{r}" for r in roles))
