"""Search index: TF-IDF weighting, inverted postings, fuzzy lookup."""
from .fuzzy import FuzzyTermMatcher, levenshtein_distance
from .search_index import IndexSnapshot, SearchIndex
from .tfidf import TFIDFCalculator

__all__ = [
    "FuzzyTermMatcher",
    "levenshtein_distance",
    "IndexSnapshot",
    "SearchIndex",
    "TFIDFCalculator",
]
