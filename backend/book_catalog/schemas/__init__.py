"""Pydantic schemas."""
from book_catalog.schemas.book import (
    SCHEMA_VERSION,
    Book,
    BookCreatedResponse,
    BookForm,
    BookResponse,
    BookUpdateForm,
)
from book_catalog.schemas.common import ErrorResponse, MessageResponse, StatusResponse

__all__ = [
    "SCHEMA_VERSION",
    "Book",
    "BookCreatedResponse",
    "BookForm",
    "BookResponse",
    "BookUpdateForm",
    "ErrorResponse",
    "MessageResponse",
    "StatusResponse",
]
