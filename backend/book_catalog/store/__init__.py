"""Document store backends."""
from book_catalog.store.base import (
    ID_FIELD,
    DocumentCollection,
    is_object_id,
    new_object_id,
    normalize_object_id,
)
from book_catalog.store.memory import InMemoryCollection
from book_catalog.store.sql import SqlDocumentCollection

__all__ = [
    "ID_FIELD",
    "DocumentCollection",
    "InMemoryCollection",
    "SqlDocumentCollection",
    "is_object_id",
    "new_object_id",
    "normalize_object_id",
]
