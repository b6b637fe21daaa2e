"""Pydantic schemas for Book API request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from bookstore.application.catalog.dtos import BookData, NamedReference
from bookstore.domain.catalog.entities import Author, Book, Genre

# Decimals travel as JSON numbers rather than strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class AuthorRef(BaseModel):
    """Author given by id (must exist) or by name (found or created)."""

    id: UUID | None = None
    name: str | None = Field(None, max_length=255, description="Author name")


class GenreRef(BaseModel):
    """Genre given by id (must exist) or by name (found or created)."""

    id: UUID | None = None
    name: str | None = Field(None, max_length=100, description="Genre name")


class BookRequest(BaseModel):
    """Schema for creating or replacing a Book."""

    id: UUID | None = Field(None, description="Must match the path id on update")
    title: str = Field(..., min_length=1, max_length=500, description="Book title")
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Sale price")
    published_year: int | None = Field(None, ge=1450, le=2100, description="Year of publication")
    isbn: str | None = Field(None, max_length=20, description="Book ISBN")
    authors: list[AuthorRef] | None = Field(None, description="Replaces authors when given")
    genres: list[GenreRef] | None = Field(None, description="Replaces genres when given")
    quantity_in_stock: int | None = Field(None, ge=0)
    reserved_quantity: int | None = Field(None, ge=0)
    cost_price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    supplier_info: str | None = Field(None, max_length=500)
    reorder_level: int | None = Field(None, ge=0)

    def to_book_data(self) -> BookData:
        return BookData(
            id=self.id,
            title=self.title,
            price=self.price,
            published_year=self.published_year,
            isbn=self.isbn or None,
            authors=(
                [NamedReference(id=a.id, name=a.name) for a in self.authors]
                if self.authors is not None
                else None
            ),
            genres=(
                [NamedReference(id=g.id, name=g.name) for g in self.genres]
                if self.genres is not None
                else None
            ),
            quantity_in_stock=self.quantity_in_stock,
            reserved_quantity=self.reserved_quantity,
            cost_price=self.cost_price,
            supplier_info=self.supplier_info,
            reorder_level=self.reorder_level,
        )


class AuthorResponse(BaseModel):
    id: UUID
    name: str

    @classmethod
    def from_domain(cls, author: Author) -> "AuthorResponse":
        return cls(id=author.id.value, name=author.name)


class GenreResponse(BaseModel):
    id: UUID
    name: str

    @classmethod
    def from_domain(cls, genre: Genre) -> "GenreResponse":
        return cls(id=genre.id.value, name=genre.name)


class BookResponse(BaseModel):
    """Schema for Book response, including derived inventory figures."""

    id: UUID
    title: str
    price: Money
    published_year: int | None
    isbn: str | None
    authors: list[AuthorResponse]
    genres: list[GenreResponse]
    quantity_in_stock: int
    reserved_quantity: int
    available_quantity: int
    is_available: bool
    needs_restock: bool
    cost_price: Money | None
    margin: Money | None
    margin_percent: Money | None
    supplier_info: str | None
    reorder_level: int
    view_count: int
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id.value,
            title=book.title,
            price=book.price,
            published_year=book.published_year,
            isbn=book.isbn,
            authors=[AuthorResponse.from_domain(a) for a in book.authors],
            genres=[GenreResponse.from_domain(g) for g in book.genres],
            quantity_in_stock=book.quantity_in_stock,
            reserved_quantity=book.reserved_quantity,
            available_quantity=book.available_quantity,
            is_available=book.is_available,
            needs_restock=book.needs_restock,
            cost_price=book.cost_price,
            margin=book.margin,
            margin_percent=book.margin_percent,
            supplier_info=book.supplier_info,
            reorder_level=book.reorder_level,
            view_count=book.view_count,
            version=book.version,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
