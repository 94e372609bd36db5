"""
search_core.py - Core Search Logic (Reusable Service Layer)
===========================================================
Admission check plus the ranking pipeline:

    normalize -> vectorize -> fetch candidates -> score -> rank -> link enrichment

No HTTP concerns - pure business logic only. Collaborator failures are
caught here and turned into flagged results; nothing propagates to the
server loop.
"""

import logging
from typing import Optional

from modules.errors import StoreError
from modules.ranking import rank_documents, score_documents, term_frequencies
from modules.types import QueryResult
from services.search_api.clients import SearchResources
from services.search_api.timing import RequestTiming

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE = "store_unavailable"


def admit(resources: SearchResources, credential: str, origin: str) -> bool:
    """
    Run the admission check for a request.

    A live (credential, origin) record admits immediately; otherwise the
    verifier is called, outside the cache lock.
    """
    return resources.admission.check_and_register(
        credential,
        origin,
        lambda token: resources.verifier.verify(token, remote_ip=origin),
    )


def perform_search(
    query: str,
    resources: SearchResources,
    include_links: bool = False,
    num_results: Optional[int] = None,
    timing: Optional[RequestTiming] = None,
) -> QueryResult:
    """
    Execute the ranking pipeline for one query.

    Args:
        query: Raw query text
        resources: Shared process resources
        include_links: Attach inbound link annotations to the results
        num_results: Requested result count (capped at resources.max_results)
        timing: Optional timing collector

    Returns:
        QueryResult; ``error`` is set when the store failed and ``degraded``
        when link data could not be fetched
    """
    timing = timing or RequestTiming()
    if num_results is None:
        num_results = resources.default_results
    num_results = max(0, min(num_results, resources.max_results))

    with timing.stage("total_search_function"):
        with timing.stage("lemmatisation"):
            terms = resources.lexicon.normalize(query)

        if not terms:
            return QueryResult(query=query, terms=[], matching_count=0, results=[])

        with timing.stage("initial_database_query"):
            try:
                candidates = resources.store.fetch_candidates(set(terms))
                corpus_count = resources.store.corpus_document_count()
            except StoreError as e:
                logger.error(f"[SEARCH] Error fetching webpages: {e}")
                return QueryResult(query=query, terms=terms, matching_count=0, results=[], error=STORE_UNAVAILABLE)

        with timing.stage("tf_idf_calculation"):
            query_vector = term_frequencies(terms)
            scored = score_documents(query_vector, corpus_count, candidates)
            ranked = rank_documents(scored, num_results, resources.authority, resources.policy)

        degraded = False
        if include_links and ranked:
            with timing.stage("link_fetching"):
                try:
                    links = resources.store.fetch_link_data({item.document.id for item in ranked})
                except StoreError as e:
                    logger.warning(f"[SEARCH] Link fetching failed, returning results without links: {e}")
                    degraded = True
                else:
                    for item in ranked:
                        item.document.links = links.get(item.document.id)

    return QueryResult(
        query=query,
        terms=terms,
        matching_count=len(candidates),
        results=ranked,
        corpus_count=corpus_count,
        degraded=degraded,
    )
