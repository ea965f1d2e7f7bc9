"""Protocol interfaces for dependency injection."""
from .document_loader import DocumentLoaderProtocol
from .search_index import SearchIndexProtocol

__all__ = [
    "DocumentLoaderProtocol",
    "SearchIndexProtocol",
]
