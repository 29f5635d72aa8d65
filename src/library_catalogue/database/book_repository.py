"""
Book repository implementation for the Library Catalogue.

Handles the catalogue side of the store:
- Adding books with a unique ISBN
- Listing and prefix-searching titles, case-insensitively
- Availability, derived from the active-loan counter
"""

import logging

from pydantic import BaseModel, Field

from ..models import Book
from .repository import BaseRepository, DuplicateError, RepositoryException

logger = logging.getLogger(__name__)


class BookCreateSchema(BaseModel):
    """Schema for adding a book."""

    isbn: str
    title: str
    author: str
    total_copies: int = Field(ge=0)


def title_sort_key(book: Book) -> str:
    """Case-insensitive ordering key for titles."""
    return book.title.casefold()


class BookRepository(BaseRepository[str, Book]):
    """
    Repository for catalogue entries.

    Sorting is stable over the store's insertion order, so books with
    titles that compare equal keep the order they were added in.
    """

    @property
    def collection(self) -> dict[str, Book]:
        return self.store.books

    def create(self, book_data: BookCreateSchema) -> Book:
        """
        Add a book to the catalogue and start its active-loan counter at 0.

        Args:
            book_data: Book creation data

        Returns:
            The stored book

        Raises:
            DuplicateError: If the ISBN is already catalogued
        """
        with self.store.transaction():
            if book_data.isbn in self.store.books:
                raise DuplicateError(f"A book with ISBN {book_data.isbn} already exists")

            book = Book(**book_data.model_dump())
            self.store.books[book.isbn] = book
            self.store.active_loans_by_isbn[book.isbn] = 0

        logger.debug("Added book %s (%d copies)", book.isbn, book.total_copies)
        return book

    def list_sorted_by_title(self) -> list[Book]:
        """All books ordered by title, ignoring case."""
        return sorted(self.get_all(), key=title_sort_key)

    def search_by_title_prefix(self, prefix: str) -> list[Book]:
        """
        Books whose title starts with ``prefix``, ignoring case.

        Returns an empty list when nothing matches.
        """
        folded = prefix.casefold()
        matches = [book for book in self.get_all() if book.title.casefold().startswith(folded)]
        return sorted(matches, key=title_sort_key)

    def active_loan_count(self, isbn: str) -> int:
        """Number of unreturned loans for ``isbn``; 0 for unknown ISBNs."""
        with self.store.transaction():
            return self.store.active_loans_by_isbn.get(isbn, 0)

    def available_copies(self, isbn: str) -> int:
        """
        Copies on the shelf: total copies minus active loans.

        Unknown ISBNs report 0 rather than failing.
        """
        with self.store.transaction():
            book = self.store.books.get(isbn)
            if book is None:
                return 0
            return book.total_copies - self.store.active_loans_by_isbn.get(isbn, 0)

    def check_counter(self, isbn: str) -> int:
        """
        Recount active loans for ``isbn`` from the loan collection.

        Raises:
            RepositoryException: If the cached counter disagrees with the loans
        """
        with self.store.transaction():
            actual = sum(
                1 for loan in self.store.loans.values() if loan.isbn == isbn and loan.is_active
            )
            cached = self.store.active_loans_by_isbn.get(isbn, 0)
        if actual != cached:
            raise RepositoryException(
                f"Active-loan counter for {isbn} is {cached} but {actual} loans are active"
            )
        return actual
