"""Ingest text documents into a vector collection as embedded sections."""

__version__ = "0.1.0"
