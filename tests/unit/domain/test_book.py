"""Tests for the Book aggregate."""

from decimal import Decimal

import pytest

from bookstore.domain.catalog.entities import Author, Book, Genre
from bookstore.domain.catalog.exceptions import (
    InsufficientInventoryError,
    InvalidInventoryAdjustmentError,
)
from bookstore.domain.common.exceptions import ValidationError


def _book(**overrides: object) -> Book:
    values: dict[str, object] = {
        "title": "Dune",
        "price": Decimal("15.00"),
        "quantity_in_stock": 10,
    }
    values.update(overrides)
    return Book.create(**values)  # type: ignore[arg-type]


class TestBookCreation:
    def test_defaults(self) -> None:
        book = Book.create(title="  Dune  ", price=Decimal("9.99"))

        assert book.title == "Dune"
        assert book.quantity_in_stock == 0
        assert book.reserved_quantity == 0
        assert book.reorder_level == 5
        assert book.view_count == 0
        assert book.authors == []

    @pytest.mark.parametrize("title", ["", "   ", "x" * 501])
    def test_invalid_title_rejected(self, title: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _book(title=title)
        assert exc_info.value.field == "title"

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _book(price=Decimal("-0.01"))

    @pytest.mark.parametrize("year", [1449, 2101])
    def test_published_year_out_of_range_rejected(self, year: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _book(published_year=year)
        assert exc_info.value.field == "published_year"

    def test_year_bounds_are_inclusive(self) -> None:
        assert _book(published_year=1450).published_year == 1450
        assert _book(published_year=2100).published_year == 2100

    def test_duplicate_authors_collapsed(self) -> None:
        author = Author.create("Frank Herbert")
        book = _book(authors=[author, author])
        assert book.authors == [author]

    def test_same_id_means_same_book(self) -> None:
        book = _book()
        other = Book.create_with_id(
            id=book.id,
            title="Dune Messiah",
            price=Decimal("1"),
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
        assert book == other
        assert len({book, other}) == 1


class TestInventoryFigures:
    def test_available_quantity_never_negative(self) -> None:
        book = _book(quantity_in_stock=2, reserved_quantity=5)
        assert book.available_quantity == 0
        assert not book.is_available

    def test_needs_restock_at_reorder_level(self) -> None:
        assert _book(quantity_in_stock=5, reorder_level=5).needs_restock
        assert not _book(quantity_in_stock=6, reorder_level=5).needs_restock

    def test_margin(self) -> None:
        book = _book(price=Decimal("15.00"), cost_price=Decimal("10.00"))
        assert book.margin == Decimal("5.00")
        assert book.margin_percent == Decimal("50")

    def test_margin_percent_rounds_ratio_half_up(self) -> None:
        # 1/3 -> 0.3333 before scaling
        book = _book(price=Decimal("4.00"), cost_price=Decimal("3.00"))
        assert book.margin_percent == Decimal("33.33")

    @pytest.mark.parametrize("cost", [None, Decimal("0")])
    def test_no_margin_without_cost(self, cost: Decimal | None) -> None:
        book = _book(cost_price=cost)
        assert book.margin is None
        assert book.margin_percent is None

    def test_primary_genre_name(self) -> None:
        assert _book().primary_genre_name() == "unknown"
        assert _book(genres=[Genre.create("Sci-Fi")]).primary_genre_name() == "Sci-Fi"


class TestReservations:
    def test_reserve_holds_copies(self) -> None:
        book = _book(quantity_in_stock=10)
        book.reserve(3)
        assert book.reserved_quantity == 3
        assert book.available_quantity == 7

    def test_reserve_more_than_available(self) -> None:
        book = _book(quantity_in_stock=4, reserved_quantity=2)

        with pytest.raises(InsufficientInventoryError) as exc_info:
            book.reserve(3)

        assert exc_info.value.requested_quantity == 3
        assert exc_info.value.available_quantity == 2
        assert book.reserved_quantity == 2

    def test_reserve_requires_positive_quantity(self) -> None:
        with pytest.raises(ValidationError):
            _book().reserve(0)

    def test_release_floors_at_zero(self) -> None:
        book = _book(quantity_in_stock=10, reserved_quantity=2)
        book.release(5)
        assert book.reserved_quantity == 0


class TestStockAdjustments:
    def test_adjust_stock(self) -> None:
        book = _book(quantity_in_stock=10)
        book.adjust_stock(-4)
        book.adjust_stock(6)
        assert book.quantity_in_stock == 12

    def test_adjust_below_zero_rejected(self) -> None:
        book = _book(quantity_in_stock=3)

        with pytest.raises(InvalidInventoryAdjustmentError) as exc_info:
            book.adjust_stock(-4)

        assert exc_info.value.current_quantity == 3
        assert exc_info.value.adjustment == -4
        assert book.quantity_in_stock == 3

    def test_update_inventory_keeps_omitted_fields(self) -> None:
        book = _book(quantity_in_stock=10, supplier_info="Acme", reorder_level=2)
        book.update_inventory(quantity_in_stock=4)
        assert book.quantity_in_stock == 4
        assert book.supplier_info == "Acme"
        assert book.reorder_level == 2

    def test_negative_reorder_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _book().change_reorder_level(-1)
