"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from section_ingest.errors import EmbedError
from section_ingest.ingestion.embedder import Embedder
from section_ingest.storage.base import VectorStoreBase
from section_ingest.storage.models import CollectionInfo, Point, PointPayload, ScoredPoint


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class FakeVectorStore(VectorStoreBase):
    """In-memory store; each operation can be made to fail via ``fail_on``."""

    def __init__(self, collections: dict[str, dict[int, Point]] | None = None) -> None:
        self.collections: dict[str, dict[int, Point]] = collections or {}
        self.vector_sizes: dict[str, int] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self.upserted: list[Point] = []

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail_on:
            raise RuntimeError(f"{op} failed")

    def create_collection(self, name: str, vector_size: int) -> None:
        self._check("create")
        self.collections[name] = {}
        self.vector_sizes[name] = vector_size

    def delete_collection(self, name: str) -> None:
        self._check("delete")
        if name not in self.collections:
            raise KeyError(name)
        del self.collections[name]

    def collection_info(self, name: str) -> CollectionInfo:
        self._check("info")
        return CollectionInfo(
            name=name,
            points_count=len(self.collections[name]),
            vector_size=self.vector_sizes.get(name),
        )

    def upsert_points(self, name: str, points: Sequence[Point]) -> None:
        self._check("upsert")
        for point in points:
            self.collections[name][point.id] = point
        self.upserted.extend(points)

    def search(self, name: str, vector: list[float], *, k: int = 5) -> list[ScoredPoint]:
        self._check("search")
        hits = [ScoredPoint(id=p.id, score=1.0, payload=p.payload) for p in self.collections[name].values()]
        return hits[:k]


class FakeEmbedder(Embedder):
    """Deterministic embedder; sections containing ``fail_marker`` raise."""

    def __init__(self, vectors_per_section: int = 1, dim: int = 3, fail_marker: str | None = None) -> None:
        self.vectors_per_section = vectors_per_section
        self.dim = dim
        self.fail_marker = fail_marker
        self.texts: list[str] = []

    def embed(self, text: str) -> list[list[float]]:
        self.texts.append(text)
        if self.fail_marker is not None and self.fail_marker in text:
            raise EmbedError("embedding service unavailable", attempts=3)
        return [[float(len(text) + i)] * self.dim for i in range(self.vectors_per_section)]


def make_points(count: int, dim: int = 3) -> dict[int, Point]:
    return {i: Point(id=i, vector=[0.0] * dim, payload=PointPayload(text=f"p{i}")) for i in range(count)}


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()
