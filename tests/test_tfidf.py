"""
Tests for the term-frequency vectorizer and the TF-IDF cosine scorer.
"""

import math

import pytest

from modules.ranking import (
    inverse_document_frequency,
    score_document,
    score_documents,
    term_frequencies,
)
from tests.fixtures import make_document


class TestTermFrequencies:

    def test_single_term(self):
        assert term_frequencies(["run"]) == {"run": 1.0}

    def test_duplicates_counted(self):
        tf = term_frequencies(["fox", "run", "fox", "dog"])
        assert tf == {"fox": 0.5, "run": 0.25, "dog": 0.25}

    def test_frequencies_sum_to_one(self):
        tf = term_frequencies(["a", "b", "c", "a", "b", "a", "d"])
        assert sum(tf.values()) == pytest.approx(1.0)

    def test_empty_input(self):
        assert term_frequencies([]) == {}


class TestInverseDocumentFrequency:

    def test_natural_log(self):
        assert inverse_document_frequency(10, 3) == pytest.approx(math.log(10 / 3))

    def test_term_in_every_document_is_zero(self):
        assert inverse_document_frequency(10, 10) == 0.0

    def test_floor_at_zero(self):
        # Stale document frequency larger than the corpus.
        assert inverse_document_frequency(10, 12) == 0.0

    def test_degenerate_counts(self):
        assert inverse_document_frequency(0, 3) == 0.0
        assert inverse_document_frequency(10, 0) == 0.0


class TestScoreDocument:

    def test_single_matching_term_scores_one(self):
        # "running" -> ["run"]; the page's only keyword is "run" (df=3, N=10).
        doc = make_document(1, {"run": (5, 3)}, word_count=100)
        score = score_document({"run": 1.0}, 10, doc)
        assert score == pytest.approx(1.0)

    def test_unmatched_keywords_lower_the_score(self):
        focused = make_document(1, {"run": (5, 3)})
        diluted = make_document(2, {"run": (5, 3), "marathon": (20, 2)})
        query = {"run": 1.0}
        assert score_document(query, 10, diluted) < score_document(query, 10, focused)

    def test_known_value(self):
        doc = make_document(1, {"run": (5, 3), "fox": (5, 3)}, word_count=100)
        # Query matches one of two equally weighted terms: cos = 1/sqrt(2).
        assert score_document({"run": 1.0}, 10, doc) == pytest.approx(1 / math.sqrt(2))

    def test_no_shared_terms_scores_zero(self):
        doc = make_document(1, {"dog": (5, 3)})
        assert score_document({"run": 1.0}, 10, doc) == 0.0

    def test_zero_idf_terms_score_zero(self):
        doc = make_document(1, {"the": (10, 10)})
        assert score_document({"the": 1.0}, 10, doc) == 0.0

    def test_zero_word_count_scores_zero(self):
        doc = make_document(1, {"run": (5, 3)}, word_count=0)
        assert score_document({"run": 1.0}, 10, doc) == 0.0

    def test_score_bounded(self):
        doc = make_document(1, {"run": (7, 1), "fox": (3, 4), "dog": (1, 9)}, word_count=11)
        score = score_document({"run": 0.5, "fox": 0.25, "dog": 0.25}, 10, doc)
        assert 0.0 <= score <= 1.0


class TestScoreDocuments:

    def test_sorted_best_first(self):
        docs = [
            make_document(1, {"run": (5, 3), "marathon": (20, 2)}),
            make_document(2, {"run": (5, 3)}),
            make_document(3, {"dog": (5, 3)}),
        ]
        scored = score_documents({"run": 1.0}, 10, docs)
        assert [item.document.id for item in scored] == [2, 1, 3]
        assert scored[-1].score == 0.0

    def test_empty_candidates(self):
        assert score_documents({"run": 1.0}, 10, []) == []
