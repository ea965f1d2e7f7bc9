"""In-memory inverted index with TF-IDF ranking."""

import dataclasses
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..analysis.terms import extract_terms
from ..models.document import Document, SearchOptions, SearchResult
from ..strategies.scoring import RelevanceScorer, SnippetExtractor, matched_terms
from .fuzzy import FuzzyTermMatcher
from .tfidf import TFIDFCalculator

logger = logging.getLogger(__name__)

EXACT_MATCH_WEIGHT = 1.0
FUZZY_MATCH_WEIGHT = 0.5


@dataclass(frozen=True)
class IndexSnapshot:
    """Complete index state for one corpus version."""
    documents: tuple[Document, ...] = ()
    tfidf: TFIDFCalculator = field(default_factory=TFIDFCalculator)
    postings: Mapping[str, tuple[int, ...]] = field(default_factory=dict)


class SearchIndex:
    """Ranked, typo-tolerant search over a small document corpus.

    ``build_index`` prepares a new snapshot off to the side and publishes it
    with a single reference swap, so queries always see one complete corpus
    version.
    """

    def __init__(
        self,
        scorer: RelevanceScorer | None = None,
        snippet_extractor: SnippetExtractor | None = None,
        fuzzy_max_distance: int = 2,
    ):
        """Initialize an empty index.

        Args:
            scorer: Relevance scorer.
            snippet_extractor: Snippet extractor.
            fuzzy_max_distance: Edit distance accepted for fuzzy hits.
        """
        self._scorer = scorer or RelevanceScorer()
        self._snippets = snippet_extractor or SnippetExtractor()
        self._fuzzy_max_distance = fuzzy_max_distance
        self._snapshot = IndexSnapshot()
        self._build_lock = threading.Lock()

    @property
    def documents(self) -> tuple[Document, ...]:
        """Documents of the current snapshot, in index order."""
        return self._snapshot.documents

    @property
    def vocabulary(self) -> set[str]:
        return self._snapshot.tfidf.vocabulary

    @property
    def tfidf(self) -> TFIDFCalculator:
        return self._snapshot.tfidf

    def postings(self, term: str) -> tuple[int, ...]:
        """Document indices containing ``term``."""
        return self._snapshot.postings.get(term, ())

    def build_index(self, documents: list[Document]) -> None:
        """Replace the index with one built from ``documents``.

        Input documents are not modified; the snapshot holds copies carrying
        their TF-IDF vectors.
        """
        with self._build_lock:
            tfidf = TFIDFCalculator()
            tfidf.build_vocabulary(documents)

            indexed = tuple(
                dataclasses.replace(doc, tf_idf_vector=tfidf.calculate_tfidf(doc))
                for doc in documents
            )

            postings: dict[str, list[int]] = defaultdict(list)
            for doc_index, doc in enumerate(indexed):
                for term in dict.fromkeys(extract_terms(doc.searchable_text)):
                    postings[term].append(doc_index)

            self._snapshot = IndexSnapshot(
                documents=indexed,
                tfidf=tfidf,
                postings={term: tuple(ids) for term, ids in postings.items()},
            )

        logger.info(
            f"Index built: {len(indexed)} documents, "
            f"{len(tfidf.vocabulary)} terms, {len(postings)} postings"
        )

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
            options: ``SearchOptions`` or a mapping of option names.

        Returns:
            Results ordered by descending score.
        """
        if not isinstance(options, SearchOptions):
            options = SearchOptions.from_mapping(options)

        snapshot = self._snapshot
        query_terms = extract_terms(query)
        if not query_terms or not snapshot.documents:
            return []

        term_scores = self._collect_candidates(snapshot, query_terms, options.fuzzy_match)

        results = []
        for doc_index, term_score in term_scores.items():
            doc = snapshot.documents[doc_index]
            if options.category_filter and doc.category != options.category_filter:
                continue

            score = self._scorer.score(doc, query_terms, term_score)
            if options.priority_boost:
                score *= doc.priority

            results.append(
                SearchResult(
                    document=doc,
                    score=score,
                    matched_terms=matched_terms(doc, query_terms),
                    snippets=self._snippets.extract(doc, query_terms),
                )
            )

        results.sort(key=lambda r: r.score, reverse=True)
        return results[: max(max_results, 0)]

    def _collect_candidates(
        self, snapshot: IndexSnapshot, query_terms: list[str], fuzzy: bool
    ) -> dict[int, float]:
        """Accumulate exact and fuzzy hit weight per document index."""
        term_scores: dict[int, float] = defaultdict(float)
        matcher: Optional[FuzzyTermMatcher] = None
        if fuzzy:
            matcher = FuzzyTermMatcher(snapshot.postings, self._fuzzy_max_distance)

        for term in query_terms:
            for doc_index in snapshot.postings.get(term, ()):
                term_scores[doc_index] += EXACT_MATCH_WEIGHT

            if matcher is None:
                continue
            for near_term in matcher.matches(term):
                for doc_index in snapshot.postings[near_term]:
                    term_scores[doc_index] += FUZZY_MATCH_WEIGHT

        return term_scores
