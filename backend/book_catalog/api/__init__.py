"""API routers."""
from fastapi import APIRouter

from book_catalog.api import books, views

api_router = APIRouter()

api_router.include_router(books.router)
api_router.include_router(views.router)

__all__ = ["api_router"]
