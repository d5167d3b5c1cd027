import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from studycompanion.core import container
from studycompanion.database import DatabaseSession

T = TypeVar("T")

# container.db is shared by every request; sync dependencies run in the threadpool
_db_override_lock = threading.Lock()


def inject_service(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The provider is built with container.db overridden by the request-scoped
    session. Overriding, building and resetting happen under one lock so a
    service is never wired to another request's session.
    """

    def dependency(db: DatabaseSession) -> T:
        with _db_override_lock:
            container.db.override(db)
            try:
                return provider()
            finally:
                container.db.reset_override()

    return dependency
