import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from bookstore.core import container
from bookstore.database import DatabaseSession

T = TypeVar("T")

# Sync dependencies run in the threadpool; the container's db override is global
_container_lock = threading.Lock()


def provide(provider: Provider[T]) -> T:
    """Build an object that needs no request session."""
    with _container_lock:
        return provider()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The request-scoped session is bound to ``container.db`` while the
    use case and its repositories are built, so they all share it.
    """

    def dependency(db: DatabaseSession) -> T:
        with _container_lock:
            container.db.override(db)
            try:
                return provider()
            finally:
                container.db.reset_override()

    return dependency
