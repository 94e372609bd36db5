"""
Ranking module for the search service.

This module contains the term-frequency vectorizer, the TF-IDF cosine
similarity scorer, the site authority table and the tie-break ranker.
"""

from .authority import UNRANKED, SiteAuthorityTable, extract_host
from .ranker import HIGH_RELEVANCE_THRESHOLD, RankingPolicy, is_high_relevance, rank_documents
from .tfidf import inverse_document_frequency, score_document, score_documents
from .vectorizer import term_frequencies

__all__ = [
    "HIGH_RELEVANCE_THRESHOLD",
    "UNRANKED",
    "RankingPolicy",
    "SiteAuthorityTable",
    "extract_host",
    "inverse_document_frequency",
    "is_high_relevance",
    "rank_documents",
    "score_document",
    "score_documents",
    "term_frequencies",
]
