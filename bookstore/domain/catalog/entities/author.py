from dataclasses import dataclass
from datetime import UTC, datetime

from bookstore.domain.common.entity import Entity
from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_objects.ids import AuthorId

MAX_AUTHOR_NAME_LENGTH = 255


@dataclass(eq=False)
class Author(Entity[AuthorId]):
    """An author that can be credited on any number of books."""

    id: AuthorId
    name: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Author name is required", field="name")
        if len(self.name) > MAX_AUTHOR_NAME_LENGTH:
            raise ValidationError(
                f"Author name must not exceed {MAX_AUTHOR_NAME_LENGTH} characters", field="name"
            )

    @classmethod
    def create(cls, name: str) -> "Author":
        """Factory for creating a new author."""
        now = datetime.now(UTC)
        return cls(id=AuthorId.generate(), name=name.strip(), created_at=now, updated_at=now)

    @classmethod
    def create_with_id(
        cls, id: AuthorId, name: str, created_at: datetime, updated_at: datetime
    ) -> "Author":
        """Factory for reconstituting an author from persistence."""
        return cls(id=id, name=name, created_at=created_at, updated_at=updated_at)
