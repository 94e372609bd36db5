"""
Type definitions for the search system.

This module contains core data structures used throughout the ranking
pipeline, including webpages, keywords, link annotations and scored results.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Keyword:
    """
    A canonical word form together with its corpus-wide document frequency.

    Identity for scoring is the word form; ``documents_containing_word`` is
    fetched from the document store on every request.
    """
    word: str
    documents_containing_word: int
    id: Optional[int] = field(default=None, compare=False, hash=False)


@dataclass
class LinkData:
    """Inbound link annotations for a single webpage."""
    inbound_count: int
    sources: Dict[str, int] = field(default_factory=dict)


@dataclass
class Document:
    """
    Represents a crawled webpage in the search system.

    ``keywords`` maps each keyword to its occurrence count in this page.
    ``links`` stays ``None`` unless link enrichment was requested, so callers
    can tell "not requested" apart from "zero links".
    """
    id: int
    title: str
    url: str
    description: str
    word_count: int
    keywords: Dict[Keyword, int] = field(default_factory=dict)
    links: Optional[LinkData] = None


@dataclass(frozen=True)
class ScoredDocument:
    """
    Represents a document with its relevance score.

    Produced once per document per request and never mutated afterwards.
    """
    score: float
    document: Document


@dataclass
class QueryResult:
    """
    Represents the complete result of a search query.

    Contains the original query, its canonical terms, the number of candidate
    documents the store matched, the corpus size and the ranked documents.
    """
    query: str
    terms: List[str]
    matching_count: int
    results: List[ScoredDocument]
    corpus_count: int = 0
    error: Optional[str] = None
    degraded: bool = False
