"""Book JSON API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, Form, status

from book_catalog.api.deps import get_app_settings, get_book_service
from book_catalog.config import Settings
from book_catalog.core.exceptions import OperationNotAllowedError
from book_catalog.schemas.book import (
    BookCreatedResponse,
    BookForm,
    BookResponse,
    BookUpdateForm,
)
from book_catalog.schemas.common import ErrorResponse, MessageResponse
from book_catalog.services.book_service import BookService

router = APIRouter(prefix="/api/books", tags=["Books"])


@router.get("", response_model=list[BookResponse])
async def list_books(
    service: BookService = Depends(get_book_service),
) -> list[BookResponse]:
    """List all books in store order."""
    books = await service.list_books()
    return [BookResponse.model_validate(b) for b in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id."},
        404: {"model": ErrorResponse, "description": "Book not found."},
    },
)
async def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Retrieve a single book by id."""
    book = await service.get_book(book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Book already exists."},
        422: {"model": ErrorResponse, "description": "Missing form data."},
        503: {"model": ErrorResponse, "description": "Book not created."},
    },
)
async def create_book(
    form: Annotated[BookForm, Form()],
    service: BookService = Depends(get_book_service),
) -> BookCreatedResponse:
    """Create a book from form fields name, author, isbn, pages and year."""
    book = await service.create_book(
        name=form.name,
        author=form.author,
        isbn=form.isbn,
        pages=form.pages,
        year=form.year,
    )
    return BookCreatedResponse(
        message=f"book created with id: {book.id}",
        book=BookResponse.model_validate(book),
    )


@router.put(
    "",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id."},
        422: {"model": ErrorResponse, "description": "Missing form data."},
        503: {"model": ErrorResponse, "description": "Book not updated."},
    },
)
async def update_book(
    form: Annotated[BookUpdateForm, Form()],
    service: BookService = Depends(get_book_service),
) -> MessageResponse:
    """Replace a book's fields; the id is taken from the form body."""
    await service.update_book(
        form.id,
        name=form.name,
        author=form.author,
        isbn=form.isbn,
        pages=form.pages,
        year=form.year,
    )
    return MessageResponse(message="book updated")


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id."},
        404: {"model": ErrorResponse, "description": "Book not found."},
        405: {"model": ErrorResponse, "description": "Deleting is disabled."},
    },
)
async def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """Delete a book. Only available when ENABLE_DELETE is set."""
    if not settings.enable_delete:
        raise OperationNotAllowedError("deleting books")
    await service.delete_book(book_id)
    return MessageResponse(message="book deleted")
