"""Search index protocol for dependency injection."""
from typing import Any, Mapping, Protocol, runtime_checkable

from ..models.document import Document, SearchOptions, SearchResult


@runtime_checkable
class SearchIndexProtocol(Protocol):
    """Protocol for a rebuildable document index."""

    @property
    def documents(self) -> tuple[Document, ...]:
        """Documents of the most recent build."""
        ...

    def build_index(self, documents: list[Document]) -> None:
        """Replace the index contents.

        Args:
            documents: Complete corpus.
        """
        ...

    def search(
        self,
        query: str,
        max_results: int = 5,
        options: SearchOptions | Mapping[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Rank documents for a query.

        Args:
            query: Free text query.
            max_results: Maximum number of results.
            options: Search options.

        Returns:
            Results ordered by descending score.
        """
        ...
