"""Core business services."""
from .search_service import SearchService
from .ingest_service import IngestService

__all__ = [
    "SearchService",
    "IngestService",
]
