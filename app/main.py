"""
FastAPI application entry point.
Mount routes, Prometheus metrics, backend error handling, startup index bootstrap.
"""

import logging
from contextlib import asynccontextmanager

from elasticsearch import ApiError, TransportError
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from app.api.router import api_router
from app.config import get_settings
from app.search.elasticsearch_client import close_elasticsearch, ensure_book_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: ensure the book index when ES is available. Shutdown: close the ES client."""
    try:
        await ensure_book_index()
    except (ApiError, TransportError) as e:
        # ES may be down at boot; requests report 500 until it is back
        logger.warning("Could not ensure book index on startup: %s", e)
    yield
    await close_elasticsearch()


async def search_backend_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Any Elasticsearch I/O or API failure -> 500, logged server-side."""
    logger.exception("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Search backend error"},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Get, add, delete, update and query novels stored in Elasticsearch.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, search_backend_error_handler)
    app.add_exception_handler(TransportError, search_backend_error_handler)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router)

    return app


app = create_app()
