"""Book service tests."""
import asyncio

import pytest

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
from book_catalog.services.book_service import BookService, coerce_int
from book_catalog.services.seed import SAMPLE_BOOKS, SeedError, seed_books
from book_catalog.store import InMemoryCollection, new_object_id


class SlowCollection(InMemoryCollection):
    async def find(self, filter):
        await asyncio.sleep(1)
        return await super().find(filter)


class BrokenCollection(InMemoryCollection):
    async def insert_one(self, document):
        raise StoreError(operation="insert_one")

    async def update_one(self, filter, patch):
        raise StoreError(operation="update_one")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("412", 412),
        ("-50", -50),
        ("+7", 7),
        (1965, 1965),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("12abc", 0),
        ("1.5", 0),
        (" 12", 0),
        ("12\n", 0),
        ("\u0661\u0662", 0),
        ("9" * 5000, 0),
    ],
)
def test_coerce_int(raw, expected):
    assert coerce_int(raw) == expected


async def test_create_book_returns_inputs_with_id(service):
    book = await service.create_book("Dune", "Frank Herbert", "001", "412", "1965")

    assert book.id is not None
    assert (book.name, book.author, book.isbn, book.pages, book.year) == (
        "Dune", "Frank Herbert", "001", 412, 1965,
    )


async def test_create_book_coerces_non_numeric_to_zero(service):
    book = await service.create_book("Dune", "Frank Herbert", "001", "many", "long ago")
    assert book.pages == 0
    assert book.year == 0


@pytest.mark.parametrize(
    "name, author, isbn, missing",
    [
        ("", "Frank Herbert", "001", ["name"]),
        ("Dune", "", "001", ["author"]),
        ("Dune", "Frank Herbert", "", ["isbn"]),
        ("", "", "", ["name", "author", "isbn"]),
    ],
)
async def test_create_book_requires_name_author_isbn(name, author, isbn, missing):
    collection = SlowCollection()
    service = BookService(collection, timeout=0.01)

    # Rejected before any store access, so the slow collection never times out
    with pytest.raises(MissingDataError) as exc_info:
        await service.create_book(name, author, isbn, 1, 1)
    assert exc_info.value.details["fields"] == missing


async def test_create_duplicate_isbn_is_rejected(service):
    first = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)

    with pytest.raises(BookAlreadyExistsError) as exc_info:
        await service.create_book("Another title", "Someone else", "001", 1, 1)

    assert exc_info.value.details == {"existing_id": first.id, "matched_on": "isbn"}
    books = await service.list_books()
    assert [b.isbn for b in books].count("001") == 1


async def test_create_duplicate_name_and_author_is_rejected(service):
    await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)

    with pytest.raises(BookAlreadyExistsError) as exc_info:
        await service.create_book("Dune", "Frank Herbert", "002", 412, 1965)

    assert exc_info.value.details["matched_on"] == "name_author"
    assert len(await service.list_books()) == 1


async def test_same_name_different_author_is_allowed(service):
    await service.create_book("Poems", "Emily Dickinson", "001", 1, 1890)
    await service.create_book("Poems", "Walt Whitman", "002", 1, 1855)
    assert len(await service.list_books()) == 2


async def test_create_insert_failure_is_not_created():
    service = BookService(BrokenCollection())
    with pytest.raises(BookNotCreatedError):
        await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)


async def test_list_books_is_idempotent(service):
    await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    await service.create_book("Emma", "Jane Austen", "002", 474, 1815)

    first = await service.list_books()
    second = await service.list_books()
    assert first == second
    assert [b.name for b in first] == ["Dune", "Emma"]


async def test_get_book(service):
    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    assert await service.get_book(created.id) == created


async def test_get_book_accepts_uppercase_id(service):
    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    assert (await service.get_book(created.id.upper())).id == created.id


@pytest.mark.parametrize("bad_id", ["", "abc", "not-an-object-id-at-all!", "g" * 24])
async def test_get_book_invalid_id(service, bad_id):
    with pytest.raises(InvalidIdentifierError):
        await service.get_book(bad_id)


async def test_get_book_absent_id_is_not_found(service):
    with pytest.raises(BookNotFoundError):
        await service.get_book(new_object_id())


async def test_update_book_replaces_fields(service):
    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)

    matched = await service.update_book(created.id, "Dune", "Frank Herbert", "001", "999", "1965")
    assert matched == 1

    book = await service.get_book(created.id)
    assert book.pages == 999
    assert book.isbn == "001"
    assert book.id == created.id


async def test_update_book_allows_duplicates(service):
    await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    emma = await service.create_book("Emma", "Jane Austen", "002", 474, 1815)

    await service.update_book(emma.id, "Dune", "Frank Herbert", "001", 412, 1965)

    books = await service.list_books()
    assert [b.isbn for b in books] == ["001", "001"]


async def test_update_absent_id_is_a_noop(service):
    await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)

    matched = await service.update_book(new_object_id(), "X", "Y", "Z", 1, 1)

    assert matched == 0
    assert [b.name for b in await service.list_books()] == ["Dune"]


async def test_update_invalid_id(service):
    with pytest.raises(InvalidIdentifierError):
        await service.update_book("nope", "Dune", "Frank Herbert", "001", 1, 1)


async def test_update_requires_fields(service):
    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    with pytest.raises(MissingDataError):
        await service.update_book(created.id, "", "Frank Herbert", "001", 1, 1)


async def test_update_store_failure_is_not_updated():
    service = BookService(BrokenCollection())
    with pytest.raises(BookNotUpdatedError):
        await service.update_book(new_object_id(), "Dune", "Frank Herbert", "001", 1, 1)


async def test_delete_book(service):
    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)

    await service.delete_book(created.id)

    with pytest.raises(BookNotFoundError):
        await service.get_book(created.id)
    with pytest.raises(BookNotFoundError):
        await service.delete_book(created.id)


async def test_delete_invalid_id(service):
    with pytest.raises(InvalidIdentifierError):
        await service.delete_book("123")


async def test_search_books(service):
    await service.create_book("Dune", "Frank Herbert", "978-0441013593", 412, 1965)
    await service.create_book("Emma", "Jane Austen", "978-0141439587", 474, 1815)

    assert [b.name for b in await service.search_books("herbert")] == ["Dune"]
    assert [b.name for b in await service.search_books("EMMA")] == ["Emma"]
    assert [b.name for b in await service.search_books("0141")] == ["Emma"]
    assert await service.search_books("tolkien") == []
    assert len(await service.search_books("")) == 2
    assert len(await service.search_books(None)) == 2


async def test_store_call_times_out():
    service = BookService(SlowCollection(), timeout=0.01)
    with pytest.raises(StoreTimeoutError) as exc_info:
        await service.list_books()
    assert exc_info.value.details["operation"] == "find"


async def test_end_to_end_against_sql(sql_collection):
    service = BookService(sql_collection)

    created = await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    fetched = await service.get_book(created.id)
    assert (fetched.name, fetched.author, fetched.isbn, fetched.pages, fetched.year) == (
        "Dune", "Frank Herbert", "001", 412, 1965,
    )

    with pytest.raises(BookAlreadyExistsError):
        await service.create_book("Dune", "Frank Herbert", "001", 412, 1965)
    assert len(await sql_collection.find({"isbn": "001"})) == 1

    await service.update_book(created.id, "Dune", "Frank Herbert", "001", 999, 1965)
    updated = await service.get_book(created.id)
    assert updated.pages == 999
    assert updated.isbn == "001"


async def test_seed_books_inserts_once(collection):
    assert await seed_books(collection) == len(SAMPLE_BOOKS)
    assert await seed_books(collection) == 0

    docs = await collection.find({})
    assert [d["name"] for d in docs] == [b.name for b in SAMPLE_BOOKS]


async def test_seed_books_fails_on_duplicate_records():
    collection = InMemoryCollection()
    document = SAMPLE_BOOKS[0].to_document()
    await collection.insert_one(document)
    await collection.insert_one(document)

    with pytest.raises(SeedError):
        await seed_books(collection)
