"""Embedding client — text → vectors with a bounded retry budget."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from section_ingest.config import Settings, settings
from section_ingest.errors import EmbedError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Capability interface the pipeline embeds sections through."""

    @abstractmethod
    def embed(self, text: str) -> list[list[float]]:
        """Return one or more vectors for *text*.

        Raises
        ------
        EmbedError
            When no vectors could be produced.
        """
        ...


class RetryingEmbedder(Embedder):
    """Wrap a LangChain :class:`Embeddings` model with retry and linear backoff.

    Parameters
    ----------
    embeddings:
        Any LangChain embeddings model; ``embed_documents([text])`` is
        called once per attempt.
    max_attempts:
        Total attempts, including the first.
    backoff_seconds:
        Sleep ``backoff_seconds * attempt`` between attempts.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._embeddings = embeddings
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds

    def embed(self, text: str) -> list[list[float]]:
        last_exc: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                vectors = self._embeddings.embed_documents([text])
                if not vectors:
                    raise ValueError("embedding model returned no vectors")
                if attempt > 1:
                    logger.info("Embedding succeeded after %d attempts", attempt)
                return [list(v) for v in vectors]
            except Exception as exc:
                last_exc = exc
                logger.warning("Embedding attempt %d/%d failed: %s", attempt, self.max_attempts, exc)
                if attempt < self.max_attempts and self.backoff_seconds > 0:
                    time.sleep(self.backoff_seconds * attempt)

        raise EmbedError(
            f"Embedding failed after {self.max_attempts} attempts: {last_exc}",
            attempts=self.max_attempts,
        ) from last_exc


def get_embeddings(config: Settings = settings) -> Embeddings:
    """Return the configured LangChain embedding model.

    Provider-side retries are disabled; :class:`RetryingEmbedder` owns
    the retry budget.
    """
    if config.embedding_provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {"model": config.embedding_model, "max_retries": 0}
        if config.openai_api_key:
            kwargs["api_key"] = config.openai_api_key
        if config.openai_base_url:
            logger.info("Using OpenAI-compatible embeddings endpoint: %s", config.openai_base_url)
            kwargs["base_url"] = config.openai_base_url
        return OpenAIEmbeddings(**kwargs)

    if config.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)

    raise ValueError(f"Unsupported embedding_provider={config.embedding_provider!r}")


def build_embedder(config: Settings = settings) -> RetryingEmbedder:
    """Return a :class:`RetryingEmbedder` around the configured model."""
    return RetryingEmbedder(
        get_embeddings(config),
        max_attempts=config.embed_retry_times,
        backoff_seconds=config.embed_retry_backoff,
    )
