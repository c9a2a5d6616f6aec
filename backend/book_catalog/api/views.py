"""Server-rendered HTML pages."""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from book_catalog.api.deps import get_book_service
from book_catalog.services.book_service import BookService

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"], default_response_class=HTMLResponse)


@router.get("/")
async def index(request: Request):
    return templates.TemplateResponse(request, "index.html")


@router.get("/books")
async def book_table(request: Request, service: BookService = Depends(get_book_service)):
    books = await service.list_books()
    return templates.TemplateResponse(request, "book_table.html", {"books": books})


@router.get("/authors")
async def author_table(request: Request, service: BookService = Depends(get_book_service)):
    books = await service.list_books()
    return templates.TemplateResponse(request, "author_table.html", {"books": books})


@router.get("/years")
async def year_table(request: Request, service: BookService = Depends(get_book_service)):
    books = await service.list_books()
    return templates.TemplateResponse(request, "year_table.html", {"books": books})


@router.get("/search")
async def search(
    request: Request,
    q: Optional[str] = None,
    service: BookService = Depends(get_book_service),
):
    """Search bar; results are shown only once a query was submitted."""
    books = await service.search_books(q) if q else []
    return templates.TemplateResponse(
        request, "search.html", {"query": q or "", "books": books}
    )


@router.get("/create")
async def create_form(request: Request):
    return templates.TemplateResponse(request, "create_book.html")


@router.get("/edit/{book_id}")
async def edit_form(
    request: Request,
    book_id: str,
    service: BookService = Depends(get_book_service),
):
    book = await service.get_book(book_id)
    return templates.TemplateResponse(request, "edit_book.html", {"book": book})
