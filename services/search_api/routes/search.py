"""
search.py - Search Route Handler
=================================
Handles GET / and GET /search with parameter validation and error mapping.
Core logic delegated to services/search_core.py.

The handler is synchronous: FastAPI runs it in the worker thread pool, so
the store and verifier calls block only their own request.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from services.search_api import settings
from services.search_api.responses import error_response
from services.search_api.services.result_formatter import format_results
from services.search_api.services.search_core import admit, perform_search
from services.search_api.timing import RequestTiming

logger = logging.getLogger(__name__)

# ========================================
# Router Setup
# ========================================

router = APIRouter()


def _client_origin(request: Request) -> str:
    if settings.TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


# ========================================
# Route Handler
# ========================================

@router.get("/")
@router.get("/search")
def search(
    request: Request,
    q: str = Query(..., max_length=settings.MAX_QUERY_LENGTH, description="Free-text query"),
    token: str = Query(..., description="Turnstile token"),
    links: bool = Query(False, description="Attach inbound link data"),
    results: Optional[int] = Query(None, ge=1, description="Maximum number of results"),
):
    """
    Search endpoint.

    Returns:
        Ranked results with canonical query terms and a per-stage timing breakdown
    """
    resources = request.app.state.resources
    timing: RequestTiming = getattr(request.state, "timing", None) or RequestTiming()
    trace_id = getattr(request.state, "trace_id", "-")

    if not q.strip():
        return error_response(422, "invalid_query", "query must be non-empty string", "Pass the query as ?q=...")
    if not token.strip():
        return error_response(422, "missing_token", "token must be non-empty string", "Pass the Turnstile token as ?token=...")

    origin = _client_origin(request)
    with timing.stage("admission"):
        admitted = admit(resources, token, origin)
    if not admitted:
        logger.info("level=INFO trace_id=%s origin=%s status=BLOCKED", trace_id, origin)
        return error_response(403, "verification_failed", "Invalid Turnstile token", "Solve the challenge again")

    result = perform_search(
        query=q,
        resources=resources,
        include_links=links,
        num_results=results,
        timing=timing,
    )

    with timing.stage("results_formatting"):
        formatted = format_results(result.results, resources.authority, links, terms=set(result.terms))

    payload = {
        "ok": result.error is None,
        "query": result.query,
        "lemmatised_keywords": result.terms,
        "matching_webpages": result.matching_count,
        "website_count": result.corpus_count,
        "time_taken": timing.as_dict(),
        "results": formatted,
    }
    if result.degraded:
        payload["degraded"] = True

    if result.error is not None:
        payload["error"] = result.error
        logger.error("level=ERROR trace_id=%s terms=%d status=%s", trace_id, len(result.terms), result.error)
        return JSONResponse(status_code=503, content=payload)

    logger.info(
        "level=INFO trace_id=%s terms=%d matching=%d results=%d latency_ms=%.1f",
        trace_id,
        len(result.terms),
        result.matching_count,
        len(formatted),
        timing.elapsed_ms(),
    )
    return payload
