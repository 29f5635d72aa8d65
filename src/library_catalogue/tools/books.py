"""
Book tools for the Library Catalogue MCP server.

1. add_book: Add a catalogue entry with a unique ISBN
2. list_books: List every book by title with its availability
3. search_books: Case-insensitive title prefix search

ISBNs are validated and upper-cased here, at the edge, exactly as the
text menu does; the store only ever sees normalized keys.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..database import BookCreateSchema, BookRepository, DuplicateError, get_store
from ..models import Book
from ..validators import InvalidInputError, normalize_isbn
from .common import error_result, parse_arguments, text_result

logger = logging.getLogger(__name__)


def book_data(repo: BookRepository, book: Book) -> dict[str, Any]:
    """Serialize a book together with its current availability."""
    data = book.model_dump(mode="json")
    data["available_copies"] = repo.available_copies(book.isbn)
    return data


def isbn_field_validator(v: str) -> str:
    try:
        return normalize_isbn(v)
    except InvalidInputError as e:
        raise ValueError(str(e)) from e


# =============================================================================
# ADD BOOK
# =============================================================================


class AddBookInput(BaseModel):
    """Input schema for the add_book tool."""

    isbn: str = Field(
        ...,
        description="ISBN: 10-17 characters of digits, X and hyphens",
        examples=["9780134685991", "978-0134685991"],
    )

    title: str = Field(..., description="Book title", min_length=1, examples=["Effective Java"])

    author: str = Field(..., description="Book author", min_length=1, examples=["Joshua Bloch"])

    total_copies: int = Field(
        ...,
        description="Number of copies the library owns",
        ge=0,
        examples=[1, 2, 5],
    )

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        return isbn_field_validator(v)

    @field_validator("title", "author")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v


async def add_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the add_book tool."""
    params = parse_arguments(AddBookInput, arguments, "add_book")
    if isinstance(params, dict):
        return params

    repo = BookRepository(get_store())
    try:
        book = repo.create(BookCreateSchema(**params.model_dump()))
    except DuplicateError as e:
        logger.info("add_book rejected: %s", e)
        return error_result(str(e))

    return text_result(
        f"Book added: {book.describe(repo.available_copies(book.isbn))}",
        {"book": book_data(repo, book)},
    )


# =============================================================================
# LIST / SEARCH BOOKS
# =============================================================================


async def list_books_handler(arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Handler for the list_books tool. Takes no arguments."""
    repo = BookRepository(get_store())
    books = repo.list_sorted_by_title()
    if not books:
        return text_result("No books found!", {"books": []})

    lines = [book.describe(repo.available_copies(book.isbn)) for book in books]
    return text_result("\n".join(lines), {"books": [book_data(repo, book) for book in books]})


class SearchBooksInput(BaseModel):
    """Input schema for the search_books tool."""

    prefix: str = Field(
        ...,
        description="Title prefix, matched case-insensitively",
        min_length=1,
        examples=["eff", "The "],
    )


async def search_books_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the search_books tool."""
    params = parse_arguments(SearchBooksInput, arguments, "search_books")
    if isinstance(params, dict):
        return params

    repo = BookRepository(get_store())
    books = repo.search_by_title_prefix(params.prefix)
    if not books:
        return text_result("No matches found!", {"books": []})

    lines = [f"Found {len(books)}:"]
    lines.extend(book.describe(repo.available_copies(book.isbn)) for book in books)
    return text_result("\n".join(lines), {"books": [book_data(repo, book) for book in books]})


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

add_book = {
    "name": "add_book",
    "description": (
        "Add a book to the catalogue. The ISBN must not already be catalogued; "
        "the copy count is fixed at creation."
    ),
    "inputSchema": AddBookInput.model_json_schema(),
    "handler": add_book_handler,
}

list_books = {
    "name": "list_books",
    "description": "List every book ordered by title (case-insensitive) with available copies.",
    "inputSchema": {"type": "object", "properties": {}},
    "handler": list_books_handler,
}

search_books = {
    "name": "search_books",
    "description": "Find books whose title starts with a prefix, ignoring case.",
    "inputSchema": SearchBooksInput.model_json_schema(),
    "handler": search_books_handler,
}
