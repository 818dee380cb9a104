"""Monotonic point-id allocation."""

from __future__ import annotations

from section_ingest.storage.base import VectorStoreBase


class IdAllocator:
    """Hand out consecutive integer ids starting at *start*.

    Continuation runs seed *start* from the collection's point count,
    which is only collision-free while existing ids occupy exactly
    ``0..count-1``.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self.start = start
        self._next = start

    @classmethod
    def for_reset(cls) -> IdAllocator:
        """Allocator for a freshly created collection."""
        return cls(0)

    @classmethod
    def from_collection(cls, store: VectorStoreBase, collection_name: str) -> IdAllocator:
        """Allocator continuing after the points already in *collection_name*.

        Store errors propagate unchanged.
        """
        return cls(store.collection_info(collection_name).points_count)

    @property
    def next_id(self) -> int:
        return self._next

    @property
    def issued(self) -> int:
        """Number of ids handed out so far."""
        return self._next - self.start

    def allocate(self) -> int:
        point_id = self._next
        self._next += 1
        return point_id
