"""Common response envelope schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from bookstore.application.common.pagination import PaginatedResult

T = TypeVar("T")


class PageMeta(BaseModel):
    """Paging information for list responses."""

    page: int = Field(..., ge=0, description="Zero-based page number")
    size: int = Field(..., ge=1, description="Requested page size")
    total: int = Field(..., ge=0, description="Number of matching items across all pages")
    total_pages: int = Field(..., ge=0, description="Number of pages")

    @classmethod
    def from_result(cls, result: PaginatedResult[object]) -> "PageMeta":
        return cls(
            page=result.page,
            size=result.size,
            total=result.total,
            total_pages=result.total_pages,
        )


class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single resource or an unpaged list."""

    data: T


class PagedResponse(BaseModel, Generic[T]):
    """Envelope for one page of a list."""

    data: list[T]
    meta: PageMeta
