from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from bookstore.domain.identity import Principal, UserAccount


@dataclass(frozen=True)
class IssuedToken:
    """A signed access token and when it stops being valid."""

    access_token: str
    expires_in: int
    expires_at: datetime


class TokenServiceProtocol(Protocol):
    def issue_access_token(self, account: UserAccount) -> IssuedToken: ...

    def verify_access_token(self, token: str) -> Principal | None: ...
