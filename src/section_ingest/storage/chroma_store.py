"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import chromadb

from section_ingest.config import settings
from section_ingest.storage.base import VectorStoreBase
from section_ingest.storage.models import CollectionInfo, Point, PointPayload, ScoredPoint

logger = logging.getLogger(__name__)

# Collection-metadata key holding the configured dimensionality.
VECTOR_SIZE_KEY = "vector_size"


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Point ids are stored as decimal strings, ``payload.text`` as the
    Chroma document and ``payload.extra`` (plus ``point_id``) as metadata.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; when given, *host* and *port* are ignored.
        Otherwise an HTTP client is connected on first use, so connection
        errors surface from the store operations.
    distance_metric:
        HNSW distance function for new collections (``cosine`` | ``l2`` | ``ip``).
    upsert_batch_size:
        Max points per upsert call; also capped by the server's own limit.
    """

    def __init__(
        self,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        *,
        client: Any = None,
        distance_metric: str = settings.chroma_distance_metric,
        upsert_batch_size: int = settings.chroma_upsert_batch_size,
    ) -> None:
        self._host = host
        self._port = port
        self._client = client
        self._distance_metric = distance_metric
        self._upsert_batch_size = upsert_batch_size

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = chromadb.HttpClient(host=self._host, port=self._port)
        return self._client

    # -- collection lifecycle -------------------------------------------------

    def create_collection(self, name: str, vector_size: int) -> None:
        self.client.create_collection(
            name=name,
            metadata={VECTOR_SIZE_KEY: vector_size, "hnsw:space": self._distance_metric},
        )
        logger.info("Created Chroma collection %r (vector_size=%d)", name, vector_size)

    def delete_collection(self, name: str) -> None:
        self.client.delete_collection(name=name)

    def collection_info(self, name: str) -> CollectionInfo:
        collection = self.client.get_collection(name=name)
        metadata = collection.metadata or {}
        return CollectionInfo(
            name=name,
            points_count=collection.count(),
            vector_size=metadata.get(VECTOR_SIZE_KEY),
        )

    # -- points ---------------------------------------------------------------

    def upsert_points(self, name: str, points: Sequence[Point]) -> None:
        if not points:
            return

        collection = self.client.get_collection(name=name)
        vector_size = (collection.metadata or {}).get(VECTOR_SIZE_KEY)
        if vector_size is not None:
            for point in points:
                if len(point.vector) != vector_size:
                    raise ValueError(
                        f"Point {point.id} has {len(point.vector)} components, "
                        f"collection {name!r} expects {vector_size}"
                    )

        batch_size = min(self._upsert_batch_size, self.client.get_max_batch_size())
        for start in range(0, len(points), batch_size):
            batch = points[start : start + batch_size]
            collection.upsert(
                ids=[str(p.id) for p in batch],
                embeddings=[p.vector for p in batch],
                documents=[p.payload.text for p in batch],
                # Chroma rejects empty metadata dicts, so point_id is always present.
                metadatas=[{**p.payload.extra, "point_id": p.id} for p in batch],
            )
            logger.debug("Upserted points %d-%d into %r", start, start + len(batch), name)

    def search(self, name: str, vector: list[float], *, k: int = 5) -> list[ScoredPoint]:
        collection = self.client.get_collection(name=name)
        results = collection.query(
            query_embeddings=[vector],
            n_results=k,
            include=["documents", "metadatas", "distances"],
        )

        hits: list[ScoredPoint] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for point_id, content, meta, dist in zip(ids, docs, metas, distances):
            extra = {key: value for key, value in (meta or {}).items() if key != "point_id"}
            hits.append(
                ScoredPoint(
                    id=int(point_id),
                    # Chroma returns distances; convert to a 0-1 similarity score.
                    score=1.0 / (1.0 + dist),
                    payload=PointPayload(text=content or "", extra=extra),
                )
            )
        return hits

    def health_check(self) -> bool:
        try:
            self.client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
