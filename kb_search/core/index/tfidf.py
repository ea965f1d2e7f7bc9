"""TF-IDF weighting over a document corpus."""

import math
from collections import Counter

from ..analysis.terms import extract_terms
from ..models.document import Document


def _weighted_text(document: Document) -> str:
    return document.content + " " + document.title


class TFIDFCalculator:
    """Corpus-wide document frequencies and per-document TF-IDF vectors."""

    def __init__(self):
        self.document_frequency: Counter[str] = Counter()
        self.vocabulary: set[str] = set()
        self.total_documents = 0

    def build_vocabulary(self, documents: list[Document]) -> None:
        """Reset and recount document frequencies for a corpus."""
        self.total_documents = len(documents)
        self.document_frequency = Counter()
        self.vocabulary = set()

        for doc in documents:
            unique_terms = set(extract_terms(_weighted_text(doc)))
            self.vocabulary.update(unique_terms)
            self.document_frequency.update(unique_terms)

    @staticmethod
    def calculate_tf(terms: list[str]) -> dict[str, float]:
        """Term counts normalized by the number of terms."""
        if not terms:
            return {}
        total = len(terms)
        return {term: count / total for term, count in Counter(terms).items()}

    def calculate_idf(self, term: str) -> float:
        """log(N / df); 0 for unseen terms."""
        df = self.document_frequency.get(term, 0)
        if df == 0:
            return 0.0
        return math.log(self.total_documents / df)

    def calculate_tfidf(self, document: Document) -> dict[str, float]:
        tf = self.calculate_tf(extract_terms(_weighted_text(document)))
        return {term: value * self.calculate_idf(term) for term, value in tf.items()}
