"""Business logic services."""
from book_catalog.services.book_service import BookService, coerce_int
from book_catalog.services.seed import SAMPLE_BOOKS, SeedError, seed_books

__all__ = [
    "BookService",
    "coerce_int",
    "SAMPLE_BOOKS",
    "SeedError",
    "seed_books",
]
