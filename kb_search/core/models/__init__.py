"""Domain models."""
from .document import (
    Document,
    SearchOptions,
    SearchResponse,
    SearchResult,
    StructuredBlock,
    StructuredData,
)

__all__ = [
    "Document",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "StructuredBlock",
    "StructuredData",
]
