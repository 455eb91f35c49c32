"""
Book endpoints - get/add/delete/update/query on the "novel" documents of the book index.
Design: Thin controller; BookService talks to Elasticsearch. Missing id or document -> 404.
"""

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import BookServiceDep, RequestParams, bind
from app.schemas.book import BookCreate, BookId, BookQuery, BookUpdate

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")


@router.get("/get/book/novel")
async def get_book(svc: BookServiceDep, params: RequestParams):
    """Document source by id."""
    book_id = bind(BookId, params).id
    if book_id is None:
        raise _not_found()
    source = await svc.get(book_id)
    if source is None:
        raise _not_found()
    return source


@router.post("/add/book/novel")
async def add_book(svc: BookServiceDep, params: RequestParams) -> str:
    """Index a new novel; returns the generated id."""
    data = bind(BookCreate, params)
    return await svc.add(data)


@router.delete("/delete/book/novel")
async def delete_book(svc: BookServiceDep, params: RequestParams) -> str:
    """Delete a novel by id; 404 if it is not there."""
    book_id = bind(BookId, params).id
    if book_id is None:
        raise _not_found()
    result = await svc.delete(book_id)
    if result is None:
        raise _not_found()
    return result


@router.put("/update/book/novel")
async def update_book(svc: BookServiceDep, params: RequestParams) -> str:
    """Partial update of author/title."""
    data = bind(BookUpdate, params)
    if data.id is None:
        raise _not_found()
    result = await svc.update(data)
    if result is None:
        raise _not_found()
    return result


@router.post("/query/book/novel")
async def query_books(svc: BookServiceDep, params: RequestParams) -> list[dict]:
    """Compound query: author/title match plus word_count range."""
    return await svc.query(bind(BookQuery, params))
