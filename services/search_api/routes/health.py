"""
health.py - Health Check Endpoint
=================================
Provides:
- GET /health - liveness plus corpus, lexicon and admission cache stats
"""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Request

from modules.errors import StoreError
from services.search_api import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health(request: Request) -> Dict[str, Any]:
    """Health check endpoint. Reports "degraded" when the store is unreachable."""
    resources = request.app.state.resources
    start = time.perf_counter()

    status = "ok"
    try:
        website_count = resources.store.corpus_document_count()
    except StoreError as e:
        logger.warning(f"[HEALTH] Store check failed: {e}")
        status = "degraded"
        website_count = None

    return {
        "status": status,
        "version": settings.API_VERSION,
        "website_count": website_count,
        "lemmas": len(resources.lexicon),
        "ranked_domains": len(resources.authority),
        "ranking_policy": resources.policy.value,
        "admission": {
            "records": resources.admission.size(),
            **resources.admission.stats.as_dict(),
        },
        "latency_ms": round((time.perf_counter() - start) * 1000, 3),
    }
