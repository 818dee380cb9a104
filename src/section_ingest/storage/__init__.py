"""
Storage — vector-store interface and backends.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend (subclass for Qdrant, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`Point`, :class:`PointPayload`, :class:`CollectionInfo`,
  :class:`ScoredPoint` — data models.
"""

from section_ingest.storage.base import VectorStoreBase
from section_ingest.storage.models import CollectionInfo, Point, PointPayload, ScoredPoint

__all__ = [
    "ChromaVectorStore",
    "CollectionInfo",
    "Point",
    "PointPayload",
    "ScoredPoint",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from section_ingest.storage.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
