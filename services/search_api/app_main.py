"""
app_main.py - Entry Point for the Webpage Search API
====================================================
Composed entry point with routes, middlewares and startup resource loading.

Default port: 3000 (configurable via MAIN_PORT)

Features:
- GET / and GET /search - admission-gated TF-IDF search
- GET /health - liveness and cache statistics
- CORS & trace ID middleware
- Fatal startup when the lemma or top-domains list cannot be loaded
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from services.search_api import settings

# Configure logging first before any logging calls
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from services.search_api.clients import SearchResources, build_resources
from services.search_api.responses import error_response
from services.search_api.routes.health import router as health_router
from services.search_api.routes.search import router as search_router
from services.search_api.timing import RequestTiming


def create_app(resources: Optional[SearchResources] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        resources: Pre-built resources (tests). When None they are built from
            settings in the lifespan hook, and any load error aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = False
        if app.state.resources is None:
            logger.info("[STARTUP] Loading lexicon, authority table and store")
            app.state.resources = build_resources()
            owned = True
        yield
        if owned:
            app.state.resources.close()

    app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION, lifespan=lifespan)
    app.state.resources = resources

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def trace_middleware(request: Request, call_next):
        trace_id = (request.headers.get("x-trace-id") or "").strip() or str(uuid.uuid4())
        request.state.trace_id = trace_id
        request.state.timing = RequestTiming(start=time.perf_counter())
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with unified format"""
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        msg = f"{field}: {first.get('msg', 'Validation error')}"
        return error_response(422, "invalid_request", msg, "Required parameters: q, token")

    app.include_router(search_router)
    app.include_router(health_router)
    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.MAIN_PORT)


if __name__ == "__main__":
    run()
