"""
FastAPI dependencies - injection for the search client and request parameter binding.
Challenge: Accept fields from the query string or a form body on every endpoint.
"""

from typing import Annotated, Any

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.search.elasticsearch_client import get_elasticsearch
from app.services.book_service import BookService

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def request_params(request: Request) -> dict[str, Any]:
    """Query string merged with form fields (form wins), like Spring request param binding."""
    params: dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    return params


def bind(model: type[BaseModel], params: dict[str, Any]) -> BaseModel:
    """Validate bound params into a schema; invalid input becomes a 422."""
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False, include_context=False)) from exc


def get_book_service(es: Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]) -> BookService:
    """Factory for service with client injection (Dependency Inversion)."""
    return BookService(es)


RequestParams = Annotated[dict[str, Any], Depends(request_params)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
