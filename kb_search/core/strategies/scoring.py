"""Relevance scoring and snippet extraction."""

import re
from dataclasses import dataclass

from ..models.document import Document

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class RelevanceWeights:
    """Bonus per query term found in each document field."""
    title: float = 5.0
    alias: float = 3.0
    keyword: float = 4.0
    use_case: float = 2.0
    term_match: float = 1.5


def _count_in_any(terms: list[str], values: list[str]) -> int:
    lowered = [v.lower() for v in values]
    return sum(1 for term in terms if any(term in v for v in lowered))


class RelevanceScorer:
    """Combines TF-IDF weight with field match bonuses."""

    def __init__(self, weights: RelevanceWeights | None = None):
        self._weights = weights or RelevanceWeights()

    def score(
        self, document: Document, query_terms: list[str], term_match_count: float
    ) -> float:
        """Score a candidate document.

        Args:
            document: Candidate document with its TF-IDF vector.
            query_terms: Normalized query terms.
            term_match_count: Accumulated exact and fuzzy hit weight.

        Returns:
            Relevance score before priority boost.
        """
        w = self._weights
        score = sum(document.tf_idf_vector.get(term, 0.0) for term in query_terms)

        title_lower = document.title.lower()
        score += w.title * sum(1 for term in query_terms if term in title_lower)
        score += w.alias * _count_in_any(query_terms, document.alias_terms)
        score += w.keyword * _count_in_any(query_terms, document.search_keywords)
        score += w.use_case * _count_in_any(query_terms, document.use_cases)
        score += w.term_match * term_match_count

        return score


class SnippetExtractor:
    """Picks the sentences mentioning the most query terms."""

    def __init__(self, max_snippets: int = 3, min_sentence_length: int = 10):
        """Initialize extractor.

        Args:
            max_snippets: Maximum snippets per document.
            min_sentence_length: Sentences this short or shorter are skipped.
        """
        self._max_snippets = max_snippets
        self._min_sentence_length = min_sentence_length

    def extract(self, document: Document, query_terms: list[str]) -> list[str]:
        """Return up to ``max_snippets`` trimmed sentences, best first."""
        terms = list(dict.fromkeys(query_terms))
        scored = []

        for sentence in _SENTENCE_SPLIT_RE.split(document.content):
            text = sentence.strip()
            if len(text) <= self._min_sentence_length:
                continue
            lowered = text.lower()
            relevance = sum(1 for term in terms if term in lowered)
            if relevance > 0:
                scored.append((relevance, text))

        # sort is stable, so ties keep document order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [text for _, text in scored[: self._max_snippets]]


def matched_terms(document: Document, query_terms: list[str]) -> list[str]:
    """Query terms present in the content, title or alias terms."""
    content_lower = document.content.lower()
    title_lower = document.title.lower()
    aliases = [a.lower() for a in document.alias_terms]
    return [
        term
        for term in query_terms
        if term in content_lower
        or term in title_lower
        or any(term in alias for alias in aliases)
    ]
