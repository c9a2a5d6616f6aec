"""Book catalog service: CRUD over a document collection."""
import asyncio
import re
from typing import Any, Awaitable, Optional, TypeVar, Union

from book_catalog.core.exceptions import (
    BookAlreadyExistsError,
    BookNotCreatedError,
    BookNotFoundError,
    BookNotUpdatedError,
    InvalidIdentifierError,
    MissingDataError,
    StoreError,
    StoreTimeoutError,
)
from book_catalog.core.logging import get_logger
from book_catalog.schemas.book import Book
from book_catalog.store.base import (
    ID_FIELD,
    DocumentCollection,
    is_object_id,
    normalize_object_id,
)

logger = get_logger("services.book")

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0

_INT_RE = re.compile(r"[+-]?[0-9]+")


def coerce_int(value: Union[str, int, None], field: str = "value") -> int:
    """Convert form text to an int, treating anything non-numeric as 0.

    Only an optional sign followed by ASCII digits is accepted. Whitespace,
    decimals, non-ASCII digits, overlong digit strings and the empty string
    all yield 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    text = value or ""
    if _INT_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # Longer than the interpreter allows for str to int
            pass
    if text:
        logger.warning(f"Non-numeric {field} {text!r} coerced to 0")
    return 0


def _required(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingDataError(missing)


def _object_id(book_id: Any) -> str:
    if not is_object_id(book_id):
        raise InvalidIdentifierError(book_id)
    return normalize_object_id(book_id)


class BookService:
    """
    Service for book business logic.

    Holds no state besides the injected collection, so one instance can be
    shared by concurrent requests.
    """

    def __init__(
        self,
        collection: DocumentCollection,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._collection = collection
        self._timeout = timeout

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error(f"Store call {operation} exceeded {self._timeout}s")
            raise StoreTimeoutError(operation, self._timeout)

    async def list_books(self) -> list[Book]:
        """
        List all books in store order.
        """
        documents = await self._call("find", self._collection.find({}))
        return [Book.from_document(doc) for doc in documents]

    async def search_books(self, query: Optional[str]) -> list[Book]:
        """
        Books whose name, author or isbn contains the query, ignoring case.
        """
        books = await self.list_books()
        needle = (query or "").strip().lower()
        if not needle:
            return books
        return [
            b for b in books
            if needle in b.name.lower()
            or needle in b.author.lower()
            or needle in b.isbn.lower()
        ]

    async def get_book(self, book_id: str) -> Book:
        """
        Retrieve a book by ID.
        """
        oid = _object_id(book_id)
        document = await self._call("find_one", self._collection.find_one({ID_FIELD: oid}))
        if document is None:
            raise BookNotFoundError(oid)
        return Book.from_document(document)

    async def create_book(
        self,
        name: str,
        author: str,
        isbn: str,
        pages: Union[str, int, None] = 0,
        year: Union[str, int, None] = 0,
    ) -> Book:
        """
        Create a new book unless one with the same isbn, or the same name
        and author, already exists.

        The duplicate scan and the insert are separate store calls, so two
        concurrent creates of the same book can both succeed.
        """
        _required(name=name, author=author, isbn=isbn)
        book = Book(
            name=name,
            author=author,
            isbn=isbn,
            pages=coerce_int(pages, "pages"),
            year=coerce_int(year, "year"),
        )

        for existing in await self.list_books():
            if existing.isbn == book.isbn:
                logger.info(f"Book with isbn {isbn!r} already exists as {existing.id}")
                raise BookAlreadyExistsError(existing.id, "isbn")
            if existing.name == book.name and existing.author == book.author:
                logger.info(f"Book {name!r} by {author!r} already exists as {existing.id}")
                raise BookAlreadyExistsError(existing.id, "name_author")

        try:
            new_id = await self._call("insert_one", self._collection.insert_one(book.to_document()))
        except StoreError as e:
            raise BookNotCreatedError() from e

        book.id = new_id
        logger.info(f"Book created with id: {new_id}")
        return book

    async def update_book(
        self,
        book_id: str,
        name: str,
        author: str,
        isbn: str,
        pages: Union[str, int, None] = 0,
        year: Union[str, int, None] = 0,
    ) -> int:
        """
        Replace the mutable fields of a book and return the matched count.

        No duplicate check is made. An id that matches nothing is not an
        error; the matched count is simply 0.
        """
        oid = _object_id(book_id)
        _required(name=name, author=author, isbn=isbn)
        patch = Book(
            name=name,
            author=author,
            isbn=isbn,
            pages=coerce_int(pages, "pages"),
            year=coerce_int(year, "year"),
        ).to_document()

        try:
            matched = await self._call(
                "update_one", self._collection.update_one({ID_FIELD: oid}, patch)
            )
        except StoreError as e:
            raise BookNotUpdatedError() from e

        if not matched:
            logger.info(f"Update matched no book with id {oid}")
        return matched

    async def delete_book(self, book_id: str) -> None:
        """
        Delete a book by ID.
        """
        oid = _object_id(book_id)
        deleted = await self._call("delete_one", self._collection.delete_one({ID_FIELD: oid}))
        if not deleted:
            raise BookNotFoundError(oid)
        logger.info(f"Book {oid} deleted")
