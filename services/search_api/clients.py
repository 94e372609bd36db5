"""
clients.py - Shared Resource Manager
====================================
Heavy, process-wide resources built once at startup and shared read-only by
every request:

- Lexicon (canonicalization table)
- SiteAuthorityTable
- DocumentStore
- CredentialVerifier
- AdmissionCache (the only mutable piece, internally locked)

A missing lemma or authority file is fatal: serving with a partially loaded
normalizer would silently degrade ranking quality.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from modules.admission import AdmissionCache, AdmissionConfig
from modules.lexicon import Lexicon
from modules.ranking import RankingPolicy, SiteAuthorityTable
from services.search_api import settings
from services.search_api.store import DocumentStore, SqliteDocumentStore
from services.search_api.verifier import CredentialVerifier, TurnstileVerifier

logger = logging.getLogger(__name__)


@dataclass
class SearchResources:
    """Everything the search pipeline needs, wired once per process."""
    lexicon: Lexicon
    authority: SiteAuthorityTable
    store: DocumentStore
    verifier: CredentialVerifier
    admission: AdmissionCache
    policy: RankingPolicy = RankingPolicy.PRECISION
    max_results: int = 100
    default_results: int = 100

    def close(self):
        close = getattr(self.verifier, "close", None)
        if callable(close):
            close()


def build_resources(verifier: Optional[CredentialVerifier] = None) -> SearchResources:
    """
    Build resources from settings.

    Raises:
        LexiconLoadError: If the lemma table cannot be loaded
        AuthorityLoadError: If the top-domains list cannot be loaded
        ValueError: On an invalid ranking policy or a missing Turnstile secret
    """
    lexicon = Lexicon.from_file(settings.LEMMA_PATH)
    authority = SiteAuthorityTable.from_file(settings.TOP_DOMAINS_PATH)
    policy = RankingPolicy.parse(settings.RANKING_POLICY)

    if not settings.DATABASE_PATH.exists():
        logger.warning(f"[CLIENTS] Database file {settings.DATABASE_PATH} does not exist yet")
    store = SqliteDocumentStore(settings.DATABASE_PATH)

    if verifier is None:
        if not settings.TURNSTILE_SECRET_KEY:
            raise ValueError("TURNSTILE_SECRET_KEY must be set")
        verifier = TurnstileVerifier(
            secret_key=settings.TURNSTILE_SECRET_KEY,
            verify_url=settings.TURNSTILE_VERIFY_URL,
            timeout=settings.VERIFY_TIMEOUT_SEC,
        )

    admission = AdmissionCache(AdmissionConfig(window_sec=settings.ADMISSION_WINDOW_SEC))

    logger.info(
        f"[CLIENTS] Resources ready: lemmas={len(lexicon)} domains={len(authority)} "
        f"policy={policy.value} max_results={settings.MAX_RESULTS}"
    )
    return SearchResources(
        lexicon=lexicon,
        authority=authority,
        store=store,
        verifier=verifier,
        admission=admission,
        policy=policy,
        max_results=settings.MAX_RESULTS,
        default_results=min(settings.DEFAULT_RESULTS, settings.MAX_RESULTS),
    )
