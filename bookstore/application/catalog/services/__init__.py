from .reference_resolver import CatalogReferenceResolver

__all__ = ["CatalogReferenceResolver"]
