"""Domain models for points persisted to a vector collection."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Value types accepted as flat metadata by the supported backends.
ExtraValue = str | int | float | bool


class PointPayload(BaseModel):
    """Payload stored alongside a vector.

    Attributes
    ----------
    text:
        Full content of the section the vector was computed from.
    extra:
        Additional flat fields.  Nothing in the pipeline sets these yet;
        they are passed through to the backend untouched.
    """

    text: str
    extra: dict[str, ExtraValue] = Field(default_factory=dict)


class Point(BaseModel):
    """The unit persisted to storage: numeric id, vector and payload."""

    id: int = Field(ge=0)
    vector: list[float]
    payload: PointPayload


class CollectionInfo(BaseModel):
    """Running statistics for a named collection."""

    name: str
    points_count: int = Field(ge=0)
    vector_size: int | None = None


class ScoredPoint(BaseModel):
    """A similarity-search hit."""

    id: int
    score: float
    payload: PointPayload

    def __str__(self) -> str:  # noqa: D105
        return f"[{self.id}] {self.score:.3f} {self.payload.text[:120]}…"
