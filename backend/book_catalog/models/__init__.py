"""SQLAlchemy models."""
from book_catalog.models.document import Document

__all__ = [
    "Document",
]
