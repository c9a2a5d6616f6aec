"""In-memory document collection."""
import asyncio
import copy
from typing import Optional

from book_catalog.store.base import ID_FIELD, matches, new_object_id


class InMemoryCollection:
    """
    Dict-based in-memory collection keyed by id, preserving insertion order.
    """
    def __init__(self):
        self._storage: dict[str, dict] = {}
        self._lock = asyncio.Lock()

    async def find(self, filter: dict) -> list[dict]:
        return [copy.deepcopy(doc) for doc in self._storage.values() if matches(doc, filter)]

    async def find_one(self, filter: dict) -> Optional[dict]:
        doc_id = filter.get(ID_FIELD)
        if doc_id is not None:
            doc = self._storage.get(doc_id)
            return copy.deepcopy(doc) if doc is not None and matches(doc, filter) else None
        for doc in self._storage.values():
            if matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document: dict) -> str:
        async with self._lock:
            obj = copy.deepcopy(document)
            obj[ID_FIELD] = new_object_id()
            self._storage[obj[ID_FIELD]] = obj
        return obj[ID_FIELD]

    async def update_one(self, filter: dict, patch: dict) -> int:
        async with self._lock:
            for doc_id, doc in self._storage.items():
                if matches(doc, filter):
                    updated = {**doc, **copy.deepcopy(patch)}
                    updated[ID_FIELD] = doc_id
                    self._storage[doc_id] = updated
                    return 1
        return 0

    async def delete_one(self, filter: dict) -> int:
        async with self._lock:
            for doc_id, doc in self._storage.items():
                if matches(doc, filter):
                    del self._storage[doc_id]
                    return 1
        return 0
