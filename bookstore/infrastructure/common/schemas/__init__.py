from .response_wrappers import DataResponse, PagedResponse, PageMeta

__all__ = ["DataResponse", "PageMeta", "PagedResponse"]
