"""FastAPI application exposing the ingestion pipeline as a REST API."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from section_ingest import __version__
from section_ingest.config import settings
from section_ingest.errors import EmbedError, IngestionError
from section_ingest.ingestion.embedder import Embedder, build_embedder
from section_ingest.ingestion.pipeline import IngestionPipeline
from section_ingest.ingestion.sectionizer import Sectionizer
from section_ingest.storage.base import VectorStoreBase

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Section Ingest API",
    version=__version__,
    description="Split documents into sections, embed them and store the vectors.",
)


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache
def get_store() -> VectorStoreBase:
    """Shared vector-store client, built on first use."""
    from section_ingest.storage.chroma_store import ChromaVectorStore

    return ChromaVectorStore()


@lru_cache
def get_embedder() -> Embedder:
    """Shared embedder, built on first use."""
    return build_embedder(settings)


def get_sectionizer() -> Sectionizer:
    return Sectionizer(
        settings.char_soft_limit,
        settings.char_soft_minimum,
        flush_trailing=settings.flush_trailing_section,
    )


def get_pipeline(
    store: VectorStoreBase = Depends(get_store),
    embedder: Embedder = Depends(get_embedder),
    sectionizer: Sectionizer = Depends(get_sectionizer),
) -> IngestionPipeline:
    return IngestionPipeline(store, embedder, sectionizer)


async def _read_text(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Request body is not valid UTF-8: {exc}") from exc


# ── Response schemas ──────────────────────────────────────────────────
class SearchHit(BaseModel):
    """One similarity-search result."""

    id: int
    score: float
    text: str


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health(store: VectorStoreBase = Depends(get_store)) -> dict[str, str]:
    """Liveness probe."""
    healthy = await run_in_threadpool(store.health_check)
    return {"status": "ok" if healthy else "degraded"}


@app.post("/ingest", response_class=HTMLResponse)
async def ingest(
    request: Request,
    collection_name: str = Query(..., min_length=1),
    vector_size: int = Query(..., ge=0),
    reset: str | None = Query(None),
    pipeline: IngestionPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    """Ingest the raw request body into *collection_name*.

    ``reset`` is a presence-only flag.  Pipeline failures are reported as
    a 200 response carrying a fixed message.
    """
    text = await _read_text(request)
    try:
        report = await run_in_threadpool(
            pipeline.run, collection_name, vector_size, text, reset=reset is not None
        )
    except IngestionError as exc:
        return HTMLResponse(exc.message)
    return HTMLResponse(report.message)


@app.post("/search", response_model=list[SearchHit])
async def search(
    request: Request,
    collection_name: str = Query(..., min_length=1),
    k: int = Query(5, ge=1, le=100),
    store: VectorStoreBase = Depends(get_store),
    embedder: Embedder = Depends(get_embedder),
) -> list[SearchHit]:
    """Embed the request body and return the *k* nearest stored sections."""
    text = await _read_text(request)
    try:
        vectors = await run_in_threadpool(embedder.embed, text)
    except EmbedError as exc:
        logger.error("Cannot embed search query: %s", exc)
        raise HTTPException(status_code=502, detail="Cannot embed query") from exc

    try:
        hits = await run_in_threadpool(store.search, collection_name, vectors[0], k=k)
    except Exception as exc:
        logger.error("Cannot search collection %r: %s", collection_name, exc)
        raise HTTPException(status_code=502, detail="Cannot query database!") from exc
    return [SearchHit(id=h.id, score=h.score, text=h.payload.text) for h in hits]


def main() -> None:
    """Run the API under uvicorn."""
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
