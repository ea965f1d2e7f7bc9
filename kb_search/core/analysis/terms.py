"""Term analysis shared by indexing and querying."""

import re

STOP_WORDS = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "by", "from", "up", "about", "into", "through", "during", "before",
        "after", "above", "below", "between", "among", "this", "that", "these",
        "those", "is", "are", "was", "were", "be", "been", "being", "have",
        "has", "had", "do", "does", "did", "will", "would", "could", "should",
    }
)

MIN_TERM_LENGTH = 3

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def extract_terms(text: str) -> list[str]:
    """Tokenize text into normalized terms.

    Lowercases, replaces everything but ASCII letters, digits and whitespace
    with spaces, and drops short tokens and stop words. Order and duplicates
    are preserved.

    Args:
        text: Arbitrary text.

    Returns:
        List of normalized terms.
    """
    normalized = _NON_ALNUM_RE.sub(" ", text.lower())
    return [
        term
        for term in normalized.split()
        if len(term) >= MIN_TERM_LENGTH and term not in STOP_WORDS
    ]
