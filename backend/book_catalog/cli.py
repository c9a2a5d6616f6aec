"""
Book catalog command line.

Usage:
    book-catalog serve               # Run the web server
    book-catalog seed                # Create tables and insert sample books
    book-catalog list                # Print the catalog
"""
import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from book_catalog.api.deps import get_collection  # noqa: E402
from book_catalog.config import settings  # noqa: E402
from book_catalog.core.exceptions import AppException  # noqa: E402
from book_catalog.core.logging import setup_logging  # noqa: E402
from book_catalog.database import close_db, init_db  # noqa: E402
from book_catalog.services.book_service import BookService  # noqa: E402
from book_catalog.services.seed import seed_books  # noqa: E402


async def _prepare() -> None:
    if settings.store_backend == "sql":
        await init_db()


async def run_seed() -> int:
    try:
        await _prepare()
        inserted = await seed_books(get_collection(settings))
    finally:
        await close_db()
    print(f"Inserted {inserted} sample book(s)")
    return 0


async def run_list() -> int:
    try:
        await _prepare()
        service = BookService(get_collection(settings), timeout=settings.store_timeout_seconds)
        books = await service.list_books()
    finally:
        await close_db()
    for book in books:
        print(f"{book.id}  {book.name} | {book.author} | {book.isbn} | {book.pages}p | {book.year}")
    print(f"{len(books)} book(s)")
    return 0


def run_serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run("book_catalog.main:app", host=host, port=port, reload=reload)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="book-catalog",
        description="Book catalog web application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web server")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--reload", action="store_true", default=settings.debug)

    subparsers.add_parser("seed", help="Create tables and insert sample books")
    subparsers.add_parser("list", help="Print every book in the catalog")

    args = parser.parse_args(argv)
    setup_logging(settings.log_level)

    try:
        if args.command == "serve":
            return run_serve(args.host, args.port, args.reload)
        if args.command == "seed":
            return asyncio.run(run_seed())
        return asyncio.run(run_list())
    except AppException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
