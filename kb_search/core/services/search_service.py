"""Search service - query facade over the knowledge base index."""

import logging
from typing import Any, Mapping, Optional

from ..models.document import SearchOptions, SearchResponse, SearchResult
from ..protocols.search_index import SearchIndexProtocol

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "=== KNOWLEDGE BASE INFORMATION ==="
CONTEXT_FOOTER = "=== END KNOWLEDGE BASE INFORMATION ==="


class SearchService:
    """Search service with default options and LLM context formatting."""

    def __init__(
        self,
        search_index: SearchIndexProtocol,
        max_results: int = 5,
        fuzzy_match: bool = True,
        priority_boost: bool = True,
        suggestions_limit: int = 10,
    ):
        """Initialize search service.

        Args:
            search_index: Index to query.
            max_results: Default number of results.
            fuzzy_match: Default for typo-tolerant matching.
            priority_boost: Default for priority weighting.
            suggestions_limit: Default cap for suggestions.
        """
        self._index = search_index
        self._max_results = max_results
        self._fuzzy_match = fuzzy_match
        self._priority_boost = priority_boost
        self._suggestions_limit = suggestions_limit

    def search(
        self,
        query: str,
        max_results: Optional[int] = None,
        options: SearchOptions | Mapping[str, Any] | None = None,
    ) -> SearchResponse:
        """Search the knowledge base.

        Args:
            query: Search query.
            max_results: Override number of results.
            options: Search options; unset keys use service defaults.

        Returns:
            Search response with results, context, and sources.
        """
        if max_results is None:
            max_results = self._max_results
        if isinstance(options, SearchOptions):
            search_options = options
        else:
            search_options = SearchOptions.from_mapping(
                options,
                fuzzy_match=self._fuzzy_match,
                priority_boost=self._priority_boost,
            )

        try:
            results = self._index.search(query, max_results, search_options)
        except Exception as e:
            logger.error(f"Search error: {e}")
            return SearchResponse(results=[], context="", sources=[])

        logger.info(
            f"Search: returned {len(results)}/{max_results} docs for '{query[:50]}'"
        )

        return SearchResponse(
            results=results,
            context=self.format_context(results),
            sources=self._get_unique_sources(results),
        )

    def bulk_search(
        self,
        queries: list[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> list[SearchResponse]:
        """Run several queries with shared options."""
        return [self.search(query, options=options) for query in queries]

    def suggest(self, partial: str, limit: Optional[int] = None) -> list[str]:
        """Titles, keywords and alias terms containing ``partial``.

        Args:
            partial: Fragment typed by the user.
            limit: Maximum number of suggestions.

        Returns:
            Unique suggestions in document order.
        """
        needle = partial.strip().lower()
        if not needle:
            return []
        if limit is None:
            limit = self._suggestions_limit

        suggestions: dict[str, None] = {}
        for doc in self._index.documents:
            for candidate in [doc.title, *doc.search_keywords, *doc.alias_terms]:
                if needle in candidate.lower():
                    suggestions.setdefault(candidate)

        return list(suggestions)[: max(limit, 0)]

    def format_context(self, results: list[SearchResult]) -> str:
        """Format results as context for LLM."""
        if not results:
            return ""

        parts = [CONTEXT_HEADER]
        for r in results:
            doc = r.document
            lines = [
                f"## {doc.title} ({doc.category})",
                f"Relevance Score: {r.score:.2f}",
            ]
            if r.matched_terms:
                lines.append(f"Matched Terms: {', '.join(r.matched_terms)}")
            if r.snippets:
                lines.append("Key Information:")
                lines.extend(f"- {snippet}" for snippet in r.snippets)
            if doc.use_cases:
                lines.append(f"Use Cases: {', '.join(doc.use_cases[:3])}")
            if doc.search_keywords:
                lines.append(f"Keywords: {', '.join(doc.search_keywords[:5])}")
            parts.append("\n".join(lines))
        parts.append(CONTEXT_FOOTER)

        return "\n\n".join(parts)

    def _get_unique_sources(self, results: list[SearchResult]) -> list[str]:
        """Get unique source document ids."""
        seen = set()
        sources = []
        for r in results:
            if r.source not in seen:
                seen.add(r.source)
                sources.append(r.source)
        return sources
