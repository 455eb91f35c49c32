"""
Book service - maps book operations onto Elasticsearch document APIs.
Challenge: Keep controllers thin; translate engine "not found" into None/False for 404s.
Design: Client injected per request; transport/API errors propagate to the app error handler.
"""

import json
import logging
from typing import Any

from elasticsearch import AsyncElasticsearch

from app.config import get_settings
from app.schemas.book import BookCreate, BookQuery, BookUpdate

logger = logging.getLogger(__name__)

settings = get_settings()


def _body(response) -> dict[str, Any]:
    """Response may be ObjectApiResponse; support both .body and dict access."""
    return getattr(response, "body", response)


def build_book_query(params: BookQuery) -> dict[str, Any]:
    """Bool query: match on author/title when given, word_count range always filtered."""
    must = []
    if params.author is not None:
        must.append({"match": {"author": params.author}})
    if params.title is not None:
        must.append({"match": {"title": params.title}})
    word_count = {"gte": params.gt_word_count}
    if params.lt_word_count is not None and params.lt_word_count > 0:
        word_count["lte"] = params.lt_word_count
    return {
        "bool": {
            "must": must,
            "filter": [{"range": {"word_count": word_count}}],
        }
    }


class BookService:
    """Get, add, delete, update and query novels in the book index."""

    def __init__(self, es: AsyncElasticsearch, index: str | None = None):
        self.es = es
        self.index = index or settings.book_index

    async def get(self, book_id: str) -> dict[str, Any] | None:
        """Document source by id, or None if it does not exist."""
        response = await self.es.options(ignore_status=404).get(index=self.index, id=book_id)
        body = _body(response)
        if not body.get("found"):
            return None
        return body["_source"]

    async def add(self, data: BookCreate) -> str:
        """Index a new document; Elasticsearch assigns the id."""
        response = await self.es.index(index=self.index, document=data.to_document())
        return _body(response)["_id"]

    async def delete(self, book_id: str) -> str | None:
        """Delete by id. Returns the result name ("DELETED"), or None if nothing was there."""
        response = await self.es.options(ignore_status=404).delete(index=self.index, id=book_id)
        result = _body(response).get("result")
        if result != "deleted":
            return None
        return result.upper()

    async def update(self, data: BookUpdate) -> str | None:
        """Partial update with the provided fields. Returns "UPDATED"/"NOOP", or None if missing."""
        response = await self.es.options(ignore_status=404).update(
            index=self.index, id=data.id, doc=data.to_partial_document()
        )
        body = _body(response)
        # Missing document comes back as an error body with status 404
        if "result" not in body:
            return None
        return body["result"].upper()

    async def query(self, params: BookQuery) -> list[dict[str, Any]]:
        """Compound search; first page of hit sources in engine order."""
        query = build_book_query(params)
        logger.info("query index=%s body=%s", self.index, json.dumps(query, ensure_ascii=False))
        response = await self.es.search(
            index=self.index,
            query=query,
            search_type="dfs_query_then_fetch",
            from_=0,
            size=settings.query_size,
        )
        return [hit["_source"] for hit in _body(response)["hits"]["hits"]]
