"""
API router - aggregates all endpoint modules.
Book routes sit at the root (/get/book/novel, ...); health under /health.
"""

from fastapi import APIRouter

from app.api.endpoints import books, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(books.router, tags=["books"])
