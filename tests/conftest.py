"""
Pytest fixtures - in-memory Elasticsearch stand-in and HTTP client.
Isolated tests: no running cluster; the ES dependency is overridden on the app.
"""

import copy
import itertools
import re

import pytest
import pytest_asyncio
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import NotFoundError
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.search.elasticsearch_client import get_elasticsearch


def _tokens(text) -> set[str]:
    return set(re.findall(r"\w+", str(text).lower()))


class FakeIndices:
    def __init__(self):
        self.names: set[str] = set()
        self.created: list[dict] = []

    async def exists(self, index):
        return index in self.names

    async def create(self, index, **kwargs):
        self.names.add(index)
        self.created.append({"index": index, **kwargs})
        return {"acknowledged": True, "index": index}

    async def delete(self, index):
        self.names.discard(index)
        return {"acknowledged": True}


class FakeElasticsearch:
    """Just enough of AsyncElasticsearch for the book endpoints (single index)."""

    def __init__(self, cluster_name: str = "elasticsearch"):
        self.docs: dict[str, dict] = {}
        self.indices = FakeIndices()
        self.cluster_name = cluster_name
        self.fail_with: Exception | None = None
        self.searches: list[dict] = []
        self._ids = (f"doc{n}" for n in itertools.count(1))
        self.ignore_status: tuple[int, ...] = ()

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def options(self, ignore_status=(), **kwargs):
        """Per-call view sharing the same documents, like the real client."""
        view = copy.copy(self)
        view.ignore_status = (ignore_status,) if isinstance(ignore_status, int) else tuple(ignore_status)
        return view

    def _missing(self, body: dict) -> dict:
        """A 404 is returned as a body only when the caller ignored it; otherwise it raises."""
        if 404 in self.ignore_status:
            return body
        meta = ApiResponseMeta(
            status=404,
            http_version="1.1",
            headers=HttpHeaders(),
            duration=0.0,
            node=NodeConfig("http", "localhost", 9200),
        )
        raise NotFoundError(message="Not Found", meta=meta, body=body)

    async def info(self):
        self._check()
        return {"cluster_name": self.cluster_name, "version": {"number": "8.13.0"}}

    async def get(self, index, id):
        self._check()
        if id not in self.docs:
            return self._missing({"_index": index, "_id": id, "found": False})
        return {"_index": index, "_id": id, "found": True, "_source": dict(self.docs[id])}

    async def index(self, index, document, id=None):
        self._check()
        doc_id = id or next(self._ids)
        self.docs[doc_id] = dict(document)
        return {"_index": index, "_id": doc_id, "result": "created"}

    async def delete(self, index, id):
        self._check()
        if self.docs.pop(id, None) is None:
            return self._missing({"_index": index, "_id": id, "result": "not_found"})
        return {"_index": index, "_id": id, "result": "deleted"}

    async def update(self, index, id, doc):
        self._check()
        if id not in self.docs:
            return self._missing(
                {
                    "error": {"type": "document_missing_exception", "reason": f"[{id}]: document missing"},
                    "status": 404,
                }
            )
        merged = {**self.docs[id], **doc}
        if merged == self.docs[id]:
            return {"_index": index, "_id": id, "result": "noop"}
        self.docs[id] = merged
        return {"_index": index, "_id": id, "result": "updated"}

    async def search(self, index, query, search_type=None, from_=0, size=10):
        self._check()
        self.searches.append(
            {"index": index, "query": query, "search_type": search_type, "from_": from_, "size": size}
        )
        hits = [
            {"_index": index, "_id": doc_id, "_source": dict(doc)}
            for doc_id, doc in self.docs.items()
            if self._matches(query["bool"], doc)
        ]
        return {"hits": {"total": {"value": len(hits)}, "hits": hits[from_:from_ + size]}}

    @staticmethod
    def _matches(bool_query: dict, doc: dict) -> bool:
        for clause in bool_query.get("must", []):
            ((field, text),) = clause["match"].items()
            if not _tokens(text) & _tokens(doc.get(field, "")):
                return False
        for clause in bool_query.get("filter", []):
            ((field, bounds),) = clause["range"].items()
            value = doc.get(field)
            if value is None:
                return False
            if "gte" in bounds and value < bounds["gte"]:
                return False
            if "lte" in bounds and value > bounds["lte"]:
                return False
        return True


@pytest.fixture
def es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest_asyncio.fixture
async def client(es: FakeElasticsearch):
    async def override_get_elasticsearch():
        return es

    app.dependency_overrides[get_elasticsearch] = override_get_elasticsearch
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
