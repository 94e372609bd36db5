"""
Test fixtures for the search service

Provides factory functions and in-memory collaborators for consistent test setup.
"""

from typing import Dict, List, Optional, Set

from modules.admission import AdmissionCache, AdmissionConfig
from modules.errors import StoreError
from modules.lexicon import Lexicon
from modules.ranking import RankingPolicy, SiteAuthorityTable
from modules.types import Document, Keyword, LinkData
from services.search_api.clients import SearchResources

LEMMAS = {
    "running": "run",
    "ran": "run",
    "runs": "run",
    "foxes": "fox",
    "dogs": "dog",
    "are": "be",
    "is": "be",
    "jumping": "jump",
    "jumped": "jump",
}

TOP_DOMAINS = {
    "google.com": 1,
    "wikipedia.org": 2,
    "github.com": 3,
    "python.org": 4,
}


class MockClock:
    """Mock clock for deterministic time testing."""
    def __init__(self, start_time=1000.0):
        self.current_time = start_time

    def __call__(self):
        return self.current_time

    def advance(self, seconds):
        self.current_time += seconds


def make_document(
    doc_id: int,
    keywords: Dict[str, tuple],
    word_count: int = 100,
    url: Optional[str] = None,
    title: str = "",
    description: str = "",
) -> Document:
    """
    Create a Document from {word: (occurrences, documents_containing_word)}.
    """
    return Document(
        id=doc_id,
        title=title or f"Page {doc_id}",
        url=url or f"https://site{doc_id}.example/",
        description=description,
        word_count=word_count,
        keywords={Keyword(word=word, documents_containing_word=df): count for word, (count, df) in keywords.items()},
    )


class FakeStore:
    """In-memory DocumentStore with optional failure injection."""

    def __init__(
        self,
        documents: List[Document],
        corpus_count: int = 10,
        links: Optional[Dict[int, LinkData]] = None,
        fail_candidates: bool = False,
        fail_links: bool = False,
    ):
        self.documents = documents
        self.corpus_count = corpus_count
        self.links = links or {}
        self.fail_candidates = fail_candidates
        self.fail_links = fail_links
        self.candidate_calls: List[Set[str]] = []
        self.link_calls: List[Set[int]] = []

    def fetch_candidates(self, terms: Set[str]) -> List[Document]:
        self.candidate_calls.append(set(terms))
        if self.fail_candidates:
            raise StoreError("connection refused")
        return [doc for doc in self.documents if any(k.word in terms for k in doc.keywords)]

    def fetch_link_data(self, ids: Set[int]) -> Dict[int, LinkData]:
        self.link_calls.append(set(ids))
        if self.fail_links:
            raise StoreError("connection refused")
        return {doc_id: self.links[doc_id] for doc_id in ids if doc_id in self.links}

    def corpus_document_count(self) -> int:
        if self.fail_candidates:
            raise StoreError("connection refused")
        return self.corpus_count


class FakeVerifier:
    """CredentialVerifier that accepts a fixed set of tokens and counts calls."""

    def __init__(self, valid_tokens=("good-token",)):
        self.valid_tokens = set(valid_tokens)
        self.calls = []

    def verify(self, credential: str, remote_ip: Optional[str] = None) -> bool:
        self.calls.append((credential, remote_ip))
        return credential in self.valid_tokens


def make_resources(
    store=None,
    verifier=None,
    clock=None,
    policy: RankingPolicy = RankingPolicy.PRECISION,
    max_results: int = 100,
    default_results: int = 100,
) -> SearchResources:
    """Create SearchResources wired with fakes, allowing overrides."""
    return SearchResources(
        lexicon=Lexicon(LEMMAS),
        authority=SiteAuthorityTable(TOP_DOMAINS),
        store=store if store is not None else FakeStore([]),
        verifier=verifier if verifier is not None else FakeVerifier(),
        admission=AdmissionCache(AdmissionConfig(window_sec=120), clock=clock),
        policy=policy,
        max_results=max_results,
        default_results=default_results,
    )
