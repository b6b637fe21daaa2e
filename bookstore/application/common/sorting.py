"""Parsing of client supplied ``field,direction`` sort parameters."""

from dataclasses import dataclass
from enum import StrEnum

from bookstore.domain.common.exceptions import ValidationError

DEFAULT_SORT = "title,asc"

# Accepted spellings mapped onto the sortable book attributes
BOOK_SORT_FIELDS: dict[str, str] = {
    "title": "title",
    "price": "price",
    "published_year": "published_year",
    "publishedyear": "published_year",
}


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class InvalidSortParameterError(ValidationError):
    """Raised when a sort parameter is malformed or names an unknown field."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="sort")


@dataclass(frozen=True)
class SortOrder:
    """A validated sort on a single whitelisted field."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


def parse_sort(raw: str | None, allowed_fields: dict[str, str] = BOOK_SORT_FIELDS) -> SortOrder:
    """
    Validate and parse a ``field,direction`` sort parameter.

    Only whitelisted fields are accepted, so the result is safe to turn
    into an ORDER BY clause. A missing or blank parameter falls back to
    ``title,asc``.

    Raises:
        InvalidSortParameterError: If the format, field or direction is invalid
    """
    if raw is None or not raw.strip():
        raw = DEFAULT_SORT

    parts = raw.split(",")
    if len(parts) != 2:  # noqa: PLR2004
        raise InvalidSortParameterError("Sort parameter must be in format: field,direction")

    field = parts[0].strip().lower()
    direction = parts[1].strip().lower()

    if field not in allowed_fields:
        allowed = sorted(set(allowed_fields.values()))
        raise InvalidSortParameterError(
            f"Invalid sort field: {field}. Allowed fields: {', '.join(allowed)}"
        )

    try:
        sort_direction = SortDirection(direction)
    except ValueError:
        raise InvalidSortParameterError(
            f"Invalid sort direction: {direction}. Allowed directions: asc, desc"
        ) from None

    return SortOrder(field=allowed_fields[field], direction=sort_direction)
