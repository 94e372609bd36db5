"""
TF-IDF Cosine Similarity Scorer

Scores candidate webpages against a query vector. Candidates come from the
document store already populated with per-keyword occurrence counts and the
corpus-wide document frequency of each keyword.
"""

import math
from typing import Dict, Iterable, List

from modules.types import Document, ScoredDocument


def inverse_document_frequency(corpus_document_count: int, documents_containing_word: int) -> float:
    """
    IDF(t) = ln(N / DF(t)), floored at 0.

    Terms present in every document land at ln(1) = 0, sometimes a hair below
    because of rounding, hence the floor.
    """
    if corpus_document_count <= 0 or documents_containing_word <= 0:
        return 0.0
    return max(0.0, math.log(corpus_document_count / documents_containing_word))


def score_document(query_vector: Dict[str, float], corpus_document_count: int, document: Document) -> float:
    """
    Compute the cosine similarity between a query vector and one document.

    Only keywords shared with the query feed the dot product and the query norm,
    while every keyword of the document feeds the document norm. Documents with
    many unmatched keywords are pushed down as a result.

    Args:
        query_vector: {term: normalized query frequency}
        corpus_document_count: Total number of documents in the corpus
        document: Candidate webpage

    Returns:
        Similarity in [0, 1]; 0 when nothing is shared
    """
    if not query_vector or document.word_count <= 0:
        return 0.0

    query_norm_sq = 0.0
    doc_norm_sq = 0.0
    dot_product = 0.0

    for keyword, occurrences in document.keywords.items():
        tf = occurrences / document.word_count
        idf = inverse_document_frequency(corpus_document_count, keyword.documents_containing_word)
        doc_weight = tf * idf
        doc_norm_sq += doc_weight ** 2

        query_tf = query_vector.get(keyword.word)
        if query_tf is not None:
            query_weight = query_tf * idf
            query_norm_sq += query_weight ** 2
            dot_product += query_weight * doc_weight

    query_norm = math.sqrt(query_norm_sq)
    doc_norm = math.sqrt(doc_norm_sq)
    if query_norm > 0 and doc_norm > 0:
        return min(1.0, max(0.0, dot_product / (query_norm * doc_norm)))
    return 0.0


def score_documents(
    query_vector: Dict[str, float],
    corpus_document_count: int,
    documents: Iterable[Document],
) -> List[ScoredDocument]:
    """
    Score every candidate and sort by similarity (descending).

    Args:
        query_vector: {term: normalized query frequency}
        corpus_document_count: Total number of documents in the corpus
        documents: Candidate webpages from the store

    Returns:
        List of ScoredDocument objects, best first
    """
    scored = [
        ScoredDocument(score=score_document(query_vector, corpus_document_count, doc), document=doc)
        for doc in documents
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored
