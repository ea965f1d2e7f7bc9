"""Edit-distance matching of query terms against indexed terms."""

from typing import Iterable, Iterator

import numpy as np


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost insertions, deletions and substitutions.

    Computes one DP row at a time. Within a row, insertions chain left to
    right, which is a running minimum of ``row[k] - k`` shifted back by ``j``.
    """
    b_chars = np.array(list(b), dtype="U1")
    offsets = np.arange(len(b) + 1)
    previous = offsets.copy()

    for i, char in enumerate(a, start=1):
        substitution = (b_chars != char).astype(np.int64)
        row = np.empty_like(previous)
        row[0] = i
        row[1:] = np.minimum(previous[1:] + 1, previous[:-1] + substitution)
        previous = np.minimum.accumulate(row - offsets) + offsets

    return int(previous[-1])


class FuzzyTermMatcher:
    """Finds indexed terms within an edit distance of a query term.

    Scans the whole vocabulary per lookup, which is fine for a knowledge base
    of a few hundred documents. A BK-tree would keep the same interface for
    larger corpora.
    """

    def __init__(self, terms: Iterable[str], max_distance: int = 2):
        """Initialize matcher.

        Args:
            terms: Distinct indexed terms.
            max_distance: Largest accepted edit distance.
        """
        self._terms = list(terms)
        self._max_distance = max_distance

    def matches(self, query_term: str) -> Iterator[str]:
        """Yield indexed terms within ``max_distance`` of ``query_term``."""
        for term in self._terms:
            # length difference is a lower bound on the distance
            if abs(len(term) - len(query_term)) > self._max_distance:
                continue
            if levenshtein_distance(query_term, term) <= self._max_distance:
                yield term
