"""Tests for TF-IDF weighting, the inverted index and fuzzy matching."""

import math
import threading

import pytest

from kb_search.core.index.fuzzy import FuzzyTermMatcher, levenshtein_distance
from kb_search.core.index.search_index import SearchIndex
from kb_search.core.index.tfidf import TFIDFCalculator
from kb_search.core.models.document import Document


def _doc(doc_id, content, title="", **kwargs):
    return Document(id=doc_id, filename=doc_id, title=title, content=content, **kwargs)


def _reference_distance(a, b):
    matrix = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        matrix[i][0] = i
    for j in range(len(b) + 1):
        matrix[0][j] = j
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
    return matrix[len(a)][len(b)]


# ---------------------------------------------------------------------------
# TF-IDF
# ---------------------------------------------------------------------------

class TestTFIDFCalculator:
    @pytest.fixture
    def calculator(self):
        calc = TFIDFCalculator()
        calc.build_vocabulary(
            [
                _doc("a", "savings account savings", title="Savings"),
                _doc("b", "investment account"),
                _doc("c", "mortgage account rates"),
            ]
        )
        return calc

    def test_tf_normalized_by_term_count(self):
        tf = TFIDFCalculator.calculate_tf(["a", "a", "b"])
        assert tf == {"a": pytest.approx(2 / 3), "b": pytest.approx(1 / 3)}

    def test_tf_empty(self):
        assert TFIDFCalculator.calculate_tf([]) == {}

    def test_document_frequency(self, calculator):
        assert calculator.total_documents == 3
        assert calculator.document_frequency["account"] == 3
        assert calculator.document_frequency["savings"] == 1
        assert "rates" in calculator.vocabulary

    def test_idf(self, calculator):
        assert calculator.calculate_idf("savings") == pytest.approx(math.log(3))

    def test_idf_zero_for_term_in_every_document(self, calculator):
        assert calculator.calculate_idf("account") == 0.0

    def test_idf_zero_for_unseen_term(self, calculator):
        assert calculator.calculate_idf("bitcoin") == 0.0

    def test_idf_non_negative(self, calculator):
        assert all(calculator.calculate_idf(t) >= 0 for t in calculator.vocabulary)

    def test_tfidf_vector(self, calculator):
        vector = calculator.calculate_tfidf(
            _doc("a", "savings account savings", title="Savings")
        )
        # terms: savings x3, account x1
        assert vector["savings"] == pytest.approx(0.75 * math.log(3))
        assert vector["account"] == 0.0

    def test_rebuild_resets_state(self, calculator):
        calculator.build_vocabulary([_doc("z", "crypto wallet")])
        assert calculator.total_documents == 1
        assert "account" not in calculator.vocabulary
        assert calculator.calculate_idf("account") == 0.0


# ---------------------------------------------------------------------------
# Levenshtein
# ---------------------------------------------------------------------------

class TestLevenshtein:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("test", "tset", 2),
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("same", "same", 0),
            ("invstment", "investment", 1),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    @pytest.mark.parametrize(
        "a, b",
        [
            ("account", "compound"),
            ("savings", "services"),
            ("mortgage", "mortage"),
            ("abc", ""),
            ("flaw", "lawn"),
            ("intention", "execution"),
            ("aaaa", "a"),
        ],
    )
    def test_matches_full_matrix(self, a, b):
        assert levenshtein_distance(a, b) == _reference_distance(a, b)

    def test_symmetric(self):
        assert levenshtein_distance("account", "compound") == levenshtein_distance(
            "compound", "account"
        )


class TestFuzzyTermMatcher:
    def test_matches_within_distance(self):
        matcher = FuzzyTermMatcher(["investment", "interest", "savings"], 2)
        assert list(matcher.matches("invstment")) == ["investment"]

    def test_includes_exact_term(self):
        matcher = FuzzyTermMatcher(["savings"], 2)
        assert list(matcher.matches("savings")) == ["savings"]

    def test_respects_max_distance(self):
        matcher = FuzzyTermMatcher(["investment"], 0)
        assert list(matcher.matches("invstment")) == []


# ---------------------------------------------------------------------------
# Inverted index
# ---------------------------------------------------------------------------

class TestBuildIndex:
    def test_postings_cover_searchable_surface(self):
        index = SearchIndex()
        index.build_index(
            [
                _doc("a", "card card card", title="Cards", alias_terms=["wire"]),
                _doc("b", "loan", search_keywords=["mortgage"]),
            ]
        )
        assert index.postings("card") == (0,)
        assert index.postings("cards") == (0,)
        assert index.postings("wire") == (0,)
        assert index.postings("mortgage") == (1,)
        assert index.postings("missing") == ()

    def test_does_not_mutate_input(self, corpus):
        index = SearchIndex()
        index.build_index(corpus)
        assert corpus[0].tf_idf_vector == {}
        assert index.documents[0].tf_idf_vector
        assert index.documents[0].id == corpus[0].id

    def test_rebuild_replaces_state(self, index):
        index.build_index([_doc("new", "crypto wallet")])
        assert [d.id for d in index.documents] == ["new"]
        assert index.postings("savings") == ()
        assert index.search("savings account") == []

    def test_empty_index_returns_no_results(self):
        assert SearchIndex().search("savings") == []

    def test_build_empty_corpus(self):
        index = SearchIndex()
        index.build_index([])
        assert index.documents == ()
        assert index.search("anything") == []

    def test_queries_see_complete_snapshots(self):
        corpus_a = [_doc(f"a{i}", "shared alpha content") for i in range(5)]
        corpus_b = [_doc(f"b{i}", "shared beta content") for i in range(3)]
        index = SearchIndex()
        index.build_index(corpus_a)
        stop = threading.Event()

        def rebuild():
            while not stop.is_set():
                index.build_index(corpus_b)
                index.build_index(corpus_a)

        worker = threading.Thread(target=rebuild)
        worker.start()
        try:
            for _ in range(200):
                ids = {r.document.id[0] for r in index.search("shared", 10)}
                assert len(ids) == 1
        finally:
            stop.set()
            worker.join()
