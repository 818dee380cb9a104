"""
Serving — FastAPI application exposing ingestion and search over HTTP.
"""
