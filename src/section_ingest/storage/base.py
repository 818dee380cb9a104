"""Abstract base class for vector-store backends.

Adding a new backend (Qdrant, Weaviate, Pinecone …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  The ingestion pipeline only ever talks to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from section_ingest.storage.models import CollectionInfo, Point, ScoredPoint


class VectorStoreBase(ABC):
    """Backend-agnostic interface over named collections of points.

    Every method may raise a backend-specific exception; callers decide
    which failures are fatal.
    """

    # -- collection lifecycle -------------------------------------------------

    @abstractmethod
    def create_collection(self, name: str, vector_size: int) -> None:
        """Create an empty collection whose vectors have *vector_size* components."""
        ...

    @abstractmethod
    def delete_collection(self, name: str) -> None:
        """Drop the collection *name* and every point in it."""
        ...

    @abstractmethod
    def collection_info(self, name: str) -> CollectionInfo:
        """Return the current point count (and vector size, if known) of *name*."""
        ...

    # -- points ---------------------------------------------------------------

    @abstractmethod
    def upsert_points(self, name: str, points: Sequence[Point]) -> None:
        """Insert or overwrite *points* in one call.

        Points whose ids already exist are replaced.  An empty sequence is
        a no-op.
        """
        ...

    @abstractmethod
    def search(self, name: str, vector: list[float], *, k: int = 5) -> list[ScoredPoint]:
        """Return up to *k* points nearest to *vector*, best first."""
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        return True
