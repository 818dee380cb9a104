"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_base_url: str = Field(
        default="",
        description="Base URL for an OpenAI-compatible embeddings API. Leave empty for OpenAI cloud.",
    )
    embedding_provider: str = Field(default="openai", description="Either 'openai' or 'huggingface'")
    embedding_model: str = "text-embedding-3-small"
    embed_retry_times: int = Field(default=3, ge=1, description="Attempts per section before skipping it")
    embed_retry_backoff: float = Field(
        default=0.5, ge=0.0, description="Seconds, multiplied by the attempt number"
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_distance_metric: str = "cosine"
    chroma_upsert_batch_size: int = Field(default=5000, ge=1, description="Max points per Chroma upsert call")

    # Sectioning
    char_soft_limit: int = Field(default=20000, gt=0)
    char_soft_minimum: int = Field(default=100, ge=0)
    flush_trailing_section: bool = Field(
        default=False,
        description="Emit the text left after the last blank line as a final section.",
    )

    # Serving
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Module-level instance; tests build their own `Settings`.
settings = Settings()
