"""
Ingestion — turning one raw document into stored points.

This module is responsible for turning one raw text body into points
stored in a vector collection: :class:`Sectionizer` finds section
boundaries, an :class:`Embedder` turns each section into vectors,
:class:`IdAllocator` numbers them and :class:`IngestionPipeline` drives
the whole run.
"""

from section_ingest.ingestion.embedder import Embedder, RetryingEmbedder, get_embeddings
from section_ingest.ingestion.ids import IdAllocator
from section_ingest.ingestion.pipeline import IngestionPipeline, IngestReport
from section_ingest.ingestion.sectionizer import Sectionizer, iter_lines

__all__ = [
    "Embedder",
    "IdAllocator",
    "IngestReport",
    "IngestionPipeline",
    "RetryingEmbedder",
    "Sectionizer",
    "get_embeddings",
    "iter_lines",
]
