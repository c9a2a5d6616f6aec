"""Document collection interface and identifier helpers."""
import itertools
import os
import re
import threading
import time
from typing import Any, Optional, Protocol

ID_FIELD = "_id"

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")
_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def new_object_id() -> str:
    """Generate a 24-character hex identifier.

    Layout follows the usual document-store ObjectId: 4 bytes of seconds
    since the epoch, 5 bytes unique to this process and a 3 byte counter.
    """
    with _counter_lock:
        count = next(_counter) % 0xFFFFFF
    raw = (
        int(time.time()).to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + count.to_bytes(3, "big")
    )
    return raw.hex()


def is_object_id(value: Any) -> bool:
    """Return True when ``value`` is a syntactically valid identifier."""
    return isinstance(value, str) and bool(_OBJECT_ID_RE.fullmatch(value))


def normalize_object_id(value: str) -> str:
    return value.lower()


def matches(document: dict, filter: dict) -> bool:
    """Equality match of every filter key against the document."""
    return all(document.get(key) == expected for key, expected in filter.items())


class DocumentCollection(Protocol):
    """Minimal async document collection used by the catalog service."""

    async def find(self, filter: dict) -> list[dict]:
        ...

    async def find_one(self, filter: dict) -> Optional[dict]:
        ...

    async def insert_one(self, document: dict) -> str:
        ...

    async def update_one(self, filter: dict, patch: dict) -> int:
        ...

    async def delete_one(self, filter: dict) -> int:
        ...
