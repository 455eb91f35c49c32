"""
Elasticsearch client - shared async client and book index management.
Challenge: One client per process, HTTPS + basic auth in URL, index bootstrap on startup.
"""

import logging
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Stored and wire format for publish_date, plus epoch millis for raw clients
PUBLISH_DATE_FORMAT = "yyyy-MM-dd HH:mm:ss||epoch_millis"

_es_client: AsyncElasticsearch | None = None


def _es_client_options() -> dict:
    """Build Elasticsearch client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    parsed = urlparse(url)
    if parsed.username and parsed.password:
        basic_auth = (parsed.username, parsed.password)
        # Remove auth from URL for the client (it uses basic_auth separately)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": settings.elasticsearch_timeout,
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    """Get Elasticsearch client. Used as FastAPI dependency; overridden in tests."""
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**_es_client_options())
    return _es_client


async def close_elasticsearch() -> None:
    """Close the shared client (app shutdown)."""
    global _es_client
    if _es_client is not None:
        await _es_client.close()
        _es_client = None


def book_index_mappings() -> dict:
    """Mapping for the book index. The id lives in _id only."""
    return {
        "properties": {
            "title": {"type": "text", "analyzer": "standard"},
            "author": {"type": "text", "analyzer": "standard"},
            "word_count": {"type": "integer"},
            "publish_date": {"type": "date", "format": PUBLISH_DATE_FORMAT},
        }
    }


async def ensure_book_index(es: AsyncElasticsearch | None = None) -> bool:
    """Create book index with mapping if not exists. Single-node: 0 replicas. Returns True if created."""
    if es is None:
        es = await get_elasticsearch()
    if await es.indices.exists(index=settings.book_index):
        return False
    await es.indices.create(
        index=settings.book_index,
        settings={"index": {"number_of_replicas": 0}},
        mappings=book_index_mappings(),
    )
    logger.info("Created index %r", settings.book_index)
    return True


async def reset_book_index(es: AsyncElasticsearch | None = None) -> None:
    """Drop the book index (all documents) and recreate it with the current mapping."""
    if es is None:
        es = await get_elasticsearch()
    if await es.indices.exists(index=settings.book_index):
        await es.indices.delete(index=settings.book_index)
        logger.info("Deleted index %r", settings.book_index)
    await ensure_book_index(es)
