"""Input data for the catalog use cases, decoupled from the HTTP schemas."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class NamedReference:
    """
    Reference to an author or genre.

    With an id the entity must already exist; without one it is looked
    up by name (case-insensitively) and created when missing.
    """

    id: UUID | None = None
    name: str | None = None


@dataclass(frozen=True)
class BookData:
    """Full book payload as submitted on create or update."""

    title: str
    price: Decimal
    id: UUID | None = None
    published_year: int | None = None
    isbn: str | None = None
    authors: list[NamedReference] | None = None
    genres: list[NamedReference] | None = None
    quantity_in_stock: int | None = None
    reserved_quantity: int | None = None
    cost_price: Decimal | None = None
    supplier_info: str | None = None
    reorder_level: int | None = None
