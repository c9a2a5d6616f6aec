"""Book Pydantic schemas."""
from typing import Literal, Optional

from pydantic import BaseModel, Field

from book_catalog.schemas.common import BaseSchema

SCHEMA_VERSION = "1"


class Book(BaseModel):
    """A catalog entry.

    ``id`` is assigned by the document store on insert and stays ``None``
    until then. The other fields are the mutable payload replaced wholesale
    on update.
    """

    id: Optional[str] = None
    name: str
    author: str
    isbn: str
    pages: int = 0
    year: int = 0

    def to_document(self) -> dict:
        """Document body as stored, without the id."""
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_document(cls, document: dict) -> "Book":
        return cls(
            id=document.get("_id"),
            name=document.get("name", ""),
            author=document.get("author", ""),
            isbn=document.get("isbn", ""),
            pages=document.get("pages") or 0,
            year=document.get("year") or 0,
        )


class BookResponse(BaseSchema):
    """Schema for a book in API responses."""

    schema_version: Literal["1"] = SCHEMA_VERSION
    id: str
    name: str
    author: str
    isbn: str
    pages: int
    year: int


class BookCreatedResponse(BaseModel):
    """Schema returned after a successful create."""

    schema_version: Literal["1"] = SCHEMA_VERSION
    message: str
    book: BookResponse


class BookForm(BaseModel):
    """Raw form values for create and update.

    Numbers stay as text here; the service decides how to coerce them.
    """

    name: str = ""
    author: str = ""
    isbn: str = ""
    pages: str = Field("", description="Page count, non-numeric text counts as 0")
    year: str = Field("", description="Publication year, non-numeric text counts as 0")


class BookUpdateForm(BookForm):
    """Form values for update; the target id travels in the body."""

    id: str = ""
