from typing import Protocol

from bookstore.domain.identity import UserAccount


class UserDirectoryProtocol(Protocol):
    def find_by_username(self, username: str) -> UserAccount | None: ...
