from dataclasses import dataclass
from datetime import UTC, datetime

from bookstore.domain.common.entity import Entity
from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_objects.ids import GenreId

MAX_GENRE_NAME_LENGTH = 100


@dataclass(eq=False)
class Genre(Entity[GenreId]):
    """A genre used to classify books."""

    id: GenreId
    name: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Genre name is required", field="name")
        if len(self.name) > MAX_GENRE_NAME_LENGTH:
            raise ValidationError(
                f"Genre name must not exceed {MAX_GENRE_NAME_LENGTH} characters", field="name"
            )

    @classmethod
    def create(cls, name: str) -> "Genre":
        """Factory for creating a new genre."""
        now = datetime.now(UTC)
        return cls(id=GenreId.generate(), name=name.strip(), created_at=now, updated_at=now)

    @classmethod
    def create_with_id(
        cls, id: GenreId, name: str, created_at: datetime, updated_at: datetime
    ) -> "Genre":
        """Factory for reconstituting a genre from persistence."""
        return cls(id=id, name=name, created_at=created_at, updated_at=updated_at)
