"""End-to-end ingestion run: sectionize → embed → number → upsert → report."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from section_ingest.errors import (
    CollectionCreateError,
    CollectionQueryError,
    EmbedError,
    UpsertError,
)
from section_ingest.ingestion.embedder import Embedder
from section_ingest.ingestion.ids import IdAllocator
from section_ingest.ingestion.sectionizer import Sectionizer
from section_ingest.storage.base import VectorStoreBase
from section_ingest.storage.models import Point, PointPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestReport:
    """Outcome of a successful run.

    Attributes
    ----------
    inserted:
        Number of points upserted by this run.
    total:
        Point count of the collection after the upsert.
    sections:
        Number of sections the sectionizer produced.
    skipped:
        Sections dropped because embedding failed.
    """

    inserted: int
    total: int
    sections: int = 0
    skipped: int = 0

    @property
    def message(self) -> str:
        return (
            f"Successfully inserted {self.inserted} records. "
            f"The collection now has {self.total} records in total."
        )


class IngestionPipeline:
    """Drive one document into a named collection.

    Store and embedder are injected so tests can substitute fakes.  Runs
    are sequential: one embedding call at a time, in section order, and a
    single upsert at the end.

    Parameters
    ----------
    store:
        Vector-store backend holding the collection.
    embedder:
        Turns one section into one or more vectors.
    sectionizer:
        Boundary detection; defaults to :class:`Sectionizer` with default limits.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedder: Embedder,
        sectionizer: Sectionizer | None = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._sectionizer = sectionizer or Sectionizer()

    def run(self, collection_name: str, vector_size: int, text: str, *, reset: bool = False) -> IngestReport:
        """Ingest *text* into *collection_name*.

        With *reset* the collection is dropped and recreated with
        *vector_size* and ids start at 0; otherwise ids continue from the
        collection's current point count.

        Raises
        ------
        CollectionCreateError
            The collection could not be recreated (reset mode).
        CollectionQueryError
            The existing collection could not be queried.
        UpsertError
            The upsert failed, or the follow-up count query failed.
        """
        ids = self._prepare_collection(collection_name, vector_size, reset=reset)
        logger.debug("Starting ID is %d", ids.next_id)

        points: list[Point] = []
        sections = skipped = 0
        for section in self._sectionizer.split_text(text):
            sections += 1
            try:
                vectors = self._embedder.embed(section)
            except EmbedError as exc:
                skipped += 1
                logger.error("Skipping section %d: %s", sections, exc)
                continue

            for vector in vectors:
                point = Point(id=ids.allocate(), vector=vector, payload=PointPayload(text=section))
                points.append(point)
                logger.debug("Created vector %d with length %d", point.id, len(vector))

        try:
            self._store.upsert_points(collection_name, points)
        except Exception as exc:
            logger.error("Cannot upsert into database! %s", exc)
            raise UpsertError(str(exc)) from exc

        try:
            info = self._store.collection_info(collection_name)
        except Exception as exc:
            # The upsert may have landed; the caller still sees a failure.
            logger.error("Cannot get collection stat %s", exc)
            raise UpsertError(str(exc)) from exc

        logger.info(
            "Inserted %d points (%d sections, %d skipped); %d vectors in collection %r",
            len(points),
            sections,
            skipped,
            info.points_count,
            collection_name,
        )
        return IngestReport(inserted=len(points), total=info.points_count, sections=sections, skipped=skipped)

    # -- internals ------------------------------------------------------------

    def _prepare_collection(self, collection_name: str, vector_size: int, *, reset: bool) -> IdAllocator:
        if not reset:
            logger.debug("Continue with existing collection %r", collection_name)
            try:
                return IdAllocator.from_collection(self._store, collection_name)
            except Exception as exc:
                logger.error("Cannot get collection stat %s", exc)
                raise CollectionQueryError(str(exc)) from exc

        logger.debug("Reset collection %r", collection_name)
        try:
            self._store.delete_collection(collection_name)
        except Exception as exc:
            # Nothing to delete on the first run.
            logger.warning("Ignoring failure to delete collection %r: %s", collection_name, exc)

        try:
            self._store.create_collection(collection_name, vector_size)
        except Exception as exc:
            logger.error("Cannot create collection named: %s with error: %s", collection_name, exc)
            raise CollectionCreateError(str(exc)) from exc
        return IdAllocator.for_reset()
