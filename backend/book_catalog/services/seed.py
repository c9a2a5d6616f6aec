"""Sample data inserted on first start."""
from book_catalog.core.exceptions import AppException
from book_catalog.core.logging import get_logger
from book_catalog.schemas.book import Book
from book_catalog.store.base import DocumentCollection

logger = get_logger("services.seed")

SAMPLE_BOOKS = [
    Book(
        name="The Vortex",
        author="José Eustasio Rivera",
        isbn="958-30-0804-4",
        pages=292,
        year=1924,
    ),
    Book(
        name="Frankenstein",
        author="Mary Shelley",
        isbn="978-3-649-64609-9",
        pages=280,
        year=1818,
    ),
    Book(
        name="The Black Cat",
        author="Edgar Allan Poe",
        isbn="978-3-99168-238-7",
        pages=280,
        year=1843,
    ),
]


class SeedError(AppException):
    """Sample data is in an inconsistent state."""

    def __init__(self, message: str):
        super().__init__(message, error_code="SEED_ERROR")


async def seed_books(collection: DocumentCollection, books: list[Book] = SAMPLE_BOOKS) -> int:
    """Insert each book unless an identical document is already stored.

    Returns the number of inserted books. More than one identical document
    means the collection was populated outside this function; that is
    reported as a ``SeedError``.
    """
    inserted = 0
    for book in books:
        document = book.to_document()
        found = await collection.find(document)
        if len(found) > 1:
            raise SeedError(f"more records were found for {book.name!r}")
        if found:
            logger.debug(f"Sample book {book.name!r} present as {found[0]['_id']}")
            continue
        new_id = await collection.insert_one(document)
        logger.info(f"Inserted sample book {book.name!r} with id {new_id}")
        inserted += 1
    return inserted
