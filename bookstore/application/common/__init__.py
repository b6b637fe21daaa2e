from .pagination import MAX_PAGE_SIZE, PaginatedResult, Pagination
from .sorting import InvalidSortParameterError, SortDirection, SortOrder, parse_sort
from .unit_of_work import UnitOfWork

__all__ = [
    "MAX_PAGE_SIZE",
    "InvalidSortParameterError",
    "PaginatedResult",
    "Pagination",
    "SortDirection",
    "SortOrder",
    "UnitOfWork",
    "parse_sort",
]
