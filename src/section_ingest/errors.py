"""Exceptions raised by the ingestion pipeline.

Every :class:`IngestionError` carries the fixed, human-readable ``message``
returned to the HTTP caller when a run is aborted.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for conditions that abort an ingestion run."""

    message = "Ingestion failed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class CollectionCreateError(IngestionError):
    message = "Cannot create collection"


class CollectionQueryError(IngestionError):
    message = "Cannot query database!"


class UpsertError(IngestionError):
    message = "Cannot upsert into database!"


class EmbedError(Exception):
    """Embedding a single section failed after all retry attempts.

    Not an :class:`IngestionError`: the pipeline skips the section and
    carries on.
    """

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts
