from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from bookstore.domain.catalog.entities.author import Author
from bookstore.domain.catalog.entities.genre import Genre
from bookstore.domain.catalog.exceptions import (
    InsufficientInventoryError,
    InvalidInventoryAdjustmentError,
)
from bookstore.domain.common.entity import Entity
from bookstore.domain.common.exceptions import ValidationError
from bookstore.domain.common.value_objects.ids import BookId

MAX_TITLE_LENGTH = 500
MAX_ISBN_LENGTH = 20
MAX_SUPPLIER_INFO_LENGTH = 500
MIN_PUBLISHED_YEAR = 1450
MAX_PUBLISHED_YEAR = 2100
DEFAULT_REORDER_LEVEL = 5

_MARGIN_RATIO_QUANTUM = Decimal("0.0001")
_HUNDRED = Decimal("100")

T = TypeVar("T")


@dataclass(eq=False)
class Book(Entity[BookId]):
    """
    Book aggregate root.

    Owns its catalog data and its inventory counters. Authors and genres
    are shared entities referenced by the book.
    """

    # Identity
    id: BookId

    # Catalog data
    title: str
    price: Decimal

    # Timestamps
    created_at: datetime
    updated_at: datetime

    published_year: int | None = None
    isbn: str | None = None
    authors: list[Author] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)

    # Inventory
    quantity_in_stock: int = 0
    reserved_quantity: int = 0
    cost_price: Decimal | None = None
    supplier_info: str | None = None
    reorder_level: int = DEFAULT_REORDER_LEVEL
    view_count: int = 0

    # Optimistic lock counter, owned by persistence
    version: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Title must not exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        if self.price < 0:
            raise ValidationError("Price must be zero or positive", field="price")
        if self.published_year is not None and not (
            MIN_PUBLISHED_YEAR <= self.published_year <= MAX_PUBLISHED_YEAR
        ):
            raise ValidationError(
                f"Published year must be between {MIN_PUBLISHED_YEAR} and {MAX_PUBLISHED_YEAR}",
                field="published_year",
                value=self.published_year,
            )
        if self.isbn is not None and len(self.isbn) > MAX_ISBN_LENGTH:
            raise ValidationError(
                f"ISBN must not exceed {MAX_ISBN_LENGTH} characters", field="isbn"
            )
        if self.supplier_info is not None and len(self.supplier_info) > MAX_SUPPLIER_INFO_LENGTH:
            raise ValidationError(
                f"Supplier info must not exceed {MAX_SUPPLIER_INFO_LENGTH} characters",
                field="supplier_info",
            )
        for name in ("quantity_in_stock", "reserved_quantity", "reorder_level"):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} must be zero or positive", field=name)
        if self.cost_price is not None and self.cost_price < 0:
            raise ValidationError("Cost price must be zero or positive", field="cost_price")

    # Query methods
    @property
    def available_quantity(self) -> int:
        """Copies in stock that are not held by a reservation."""
        return max(0, self.quantity_in_stock - self.reserved_quantity)

    @property
    def is_available(self) -> bool:
        return self.available_quantity > 0

    @property
    def needs_restock(self) -> bool:
        return self.available_quantity <= self.reorder_level

    @property
    def margin(self) -> Decimal | None:
        """Price minus cost, or None when the cost is unknown or zero."""
        if self.cost_price is None or self.cost_price <= 0:
            return None
        return self.price - self.cost_price

    @property
    def margin_percent(self) -> Decimal | None:
        """Margin as a percentage of cost; the ratio is rounded half-up to four places."""
        margin = self.margin
        if margin is None or self.cost_price is None:
            return None
        ratio = (margin / self.cost_price).quantize(_MARGIN_RATIO_QUANTUM, rounding=ROUND_HALF_UP)
        return ratio * _HUNDRED

    def primary_genre_name(self) -> str:
        """Genre label used for metrics; 'unknown' when the book has none."""
        return self.genres[0].name if self.genres else "unknown"

    # Command methods
    def reserve(self, quantity: int) -> None:
        """Hold copies for a pending order."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity", value=quantity)
        if self.available_quantity < quantity:
            raise InsufficientInventoryError(self.id.value, quantity, self.available_quantity)
        self.reserved_quantity += quantity
        self._touch()

    def release(self, quantity: int) -> None:
        """Give back reserved copies; the reservation never goes below zero."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity", value=quantity)
        self.reserved_quantity = max(0, self.reserved_quantity - quantity)
        self._touch()

    def adjust_stock(self, quantity_change: int) -> None:
        """Apply a signed stock movement."""
        new_quantity = self.quantity_in_stock + quantity_change
        if new_quantity < 0:
            raise InvalidInventoryAdjustmentError(
                self.id.value, self.quantity_in_stock, quantity_change
            )
        self.quantity_in_stock = new_quantity
        self._touch()

    def change_reorder_level(self, level: int) -> None:
        if level < 0:
            raise ValidationError("Reorder level must be zero or positive", field="reorder_level")
        self.reorder_level = level
        self._touch()

    def update_details(
        self,
        title: str,
        price: Decimal,
        published_year: int | None,
        isbn: str | None,
    ) -> None:
        """Replace the catalog data, re-checking every invariant."""
        self.title = title.strip()
        self.price = price
        self.published_year = published_year
        self.isbn = isbn
        self.__post_init__()
        self._touch()

    def update_inventory(
        self,
        quantity_in_stock: int | None = None,
        reserved_quantity: int | None = None,
        cost_price: Decimal | None = None,
        supplier_info: str | None = None,
        reorder_level: int | None = None,
    ) -> None:
        """Overwrite the inventory fields that were supplied; None keeps the current value."""
        if quantity_in_stock is not None:
            self.quantity_in_stock = quantity_in_stock
        if reserved_quantity is not None:
            self.reserved_quantity = reserved_quantity
        if cost_price is not None:
            self.cost_price = cost_price
        if supplier_info is not None:
            self.supplier_info = supplier_info
        if reorder_level is not None:
            self.reorder_level = reorder_level
        self.__post_init__()
        self._touch()

    def replace_authors(self, authors: list[Author]) -> None:
        self.authors = _unique(authors)
        self._touch()

    def replace_genres(self, genres: list[Genre]) -> None:
        self.genres = _unique(genres)
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)

    # Factory methods
    @classmethod
    def create(
        cls,
        title: str,
        price: Decimal,
        published_year: int | None = None,
        isbn: str | None = None,
        authors: list[Author] | None = None,
        genres: list[Genre] | None = None,
        quantity_in_stock: int | None = None,
        reserved_quantity: int | None = None,
        cost_price: Decimal | None = None,
        supplier_info: str | None = None,
        reorder_level: int | None = None,
    ) -> "Book":
        """Factory for creating a new book; unspecified counters take their defaults."""
        now = datetime.now(UTC)
        return cls(
            id=BookId.generate(),
            title=title.strip() if title else title,
            price=price,
            published_year=published_year,
            isbn=isbn,
            authors=_unique(authors or []),
            genres=_unique(genres or []),
            quantity_in_stock=quantity_in_stock if quantity_in_stock is not None else 0,
            reserved_quantity=reserved_quantity if reserved_quantity is not None else 0,
            cost_price=cost_price,
            supplier_info=supplier_info,
            reorder_level=reorder_level if reorder_level is not None else DEFAULT_REORDER_LEVEL,
            view_count=0,
            version=0,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: BookId,
        title: str,
        price: Decimal,
        created_at: datetime,
        updated_at: datetime,
        published_year: int | None = None,
        isbn: str | None = None,
        authors: list[Author] | None = None,
        genres: list[Genre] | None = None,
        quantity_in_stock: int = 0,
        reserved_quantity: int = 0,
        cost_price: Decimal | None = None,
        supplier_info: str | None = None,
        reorder_level: int = DEFAULT_REORDER_LEVEL,
        view_count: int = 0,
        version: int = 0,
    ) -> "Book":
        """Factory for reconstituting a book from persistence."""
        return cls(
            id=id,
            title=title,
            price=price,
            published_year=published_year,
            isbn=isbn,
            authors=list(authors or []),
            genres=list(genres or []),
            quantity_in_stock=quantity_in_stock,
            reserved_quantity=reserved_quantity,
            cost_price=cost_price,
            supplier_info=supplier_info,
            reorder_level=reorder_level,
            view_count=view_count,
            version=version,
            created_at=created_at,
            updated_at=updated_at,
        )


def _unique(items: list[T]) -> list[T]:
    """Drop repeated entities while keeping first-seen order."""
    seen: list[T] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen
