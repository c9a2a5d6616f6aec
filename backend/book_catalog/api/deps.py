"""
FastAPI dependencies for the document collection and book service.
"""
from functools import lru_cache

from fastapi import Depends

from book_catalog.config import Settings, get_settings
from book_catalog.database import AsyncSessionLocal
from book_catalog.services.book_service import BookService
from book_catalog.store import DocumentCollection, InMemoryCollection, SqlDocumentCollection


@lru_cache
def _memory_collection() -> InMemoryCollection:
    return InMemoryCollection()


def get_app_settings() -> Settings:
    """
    Dependency to get app settings.
    """
    return get_settings()


def get_collection(settings: Settings = Depends(get_app_settings)) -> DocumentCollection:
    """
    Dependency provider for the books collection of the configured backend.
    """
    if settings.store_backend == "memory":
        return _memory_collection()
    return SqlDocumentCollection(AsyncSessionLocal, settings.collection_name)


def get_book_service(
    collection: DocumentCollection = Depends(get_collection),
    settings: Settings = Depends(get_app_settings),
) -> BookService:
    """
    Dependency provider for BookService.
    """
    return BookService(collection, timeout=settings.store_timeout_seconds)
