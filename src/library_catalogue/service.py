"""
Catalogue service for the Library Catalogue.

``CatalogueService`` is the in-process interface the text front end talks
to. It takes already-validated primitives and answers with plain results:

- a record on success, ``None`` when the operation was rejected
  (duplicate ISBN, borrow rejected, unknown member)
- ``True``/``False`` for the operations that only report success

Rejections are never raised to the caller. The repositories underneath
raise typed exceptions; this layer logs them and turns them into the
result above.
"""

import logging

from pydantic import ValidationError

from .database import (
    BookCreateSchema,
    BookRepository,
    BorrowRejectedError,
    CatalogueStore,
    CirculationRepository,
    DuplicateError,
    MemberCreateSchema,
    MemberRepository,
    RepositoryException,
)
from .database.store import Clock
from .models import Book, Loan, LoanStats, Member

logger = logging.getLogger(__name__)


class CatalogueService:
    """
    Books, members and loans held in one in-memory store.

    Example:
        ```python
        service = CatalogueService()
        service.add_book("9780134685991", "Effective Java", "Joshua Bloch", 2)
        member = service.register_member("Jane Doe")
        loan = service.borrow("9780134685991", member.id)
        ```
    """

    def __init__(
        self,
        store: CatalogueStore | None = None,
        clock: Clock | None = None,
        loan_period_days: int | None = None,
    ):
        """
        Args:
            store: Store to work on. A fresh one is created when omitted.
            clock: Clock for a fresh store; ignored when ``store`` is given.
            loan_period_days: Overrides the configured loan period.
        """
        self.store = store if store is not None else CatalogueStore(clock)
        self.books = BookRepository(self.store)
        self.members = MemberRepository(self.store)
        self.circulation = CirculationRepository(self.store, loan_period_days)

    # ------------------------------------------------------------------
    # Books
    # ------------------------------------------------------------------

    def add_book(self, isbn: str, title: str, author: str, total_copies: int) -> Book | None:
        """
        Add a book; None if the ISBN is already catalogued.

        A negative copy count is also rejected with None.
        """
        try:
            data = BookCreateSchema(isbn=isbn, title=title, author=author, total_copies=total_copies)
            return self.books.create(data)
        except DuplicateError as e:
            logger.info("Add book rejected: %s", e)
            return None
        except ValidationError as e:
            logger.info("Add book rejected - invalid data for %s: %s", isbn, e)
            return None

    def list_books_sorted_by_title(self) -> list[Book]:
        return self.books.list_sorted_by_title()

    def search_books_by_title_prefix(self, prefix: str) -> list[Book]:
        return self.books.search_by_title_prefix(prefix)

    def available_copies(self, isbn: str) -> int:
        """Total copies minus active loans; 0 for an unknown ISBN."""
        return self.books.available_copies(isbn)

    def active_loan_count(self, isbn: str) -> int:
        return self.books.active_loan_count(isbn)

    def find_book(self, isbn: str) -> Book | None:
        return self.books.get_by_id(isbn)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def register_member(self, name: str, email: str | None = None) -> Member:
        """Register a member. Always succeeds; a blank email means no email."""
        return self.members.register(MemberCreateSchema(name=name, email=email))

    def update_member_email(self, member_id: int, email: str | None) -> bool:
        """
        Change a member's email.

        Email is optional, so None or a blank value clears it. Returns False
        only when the member does not exist.
        """
        try:
            self.members.update_email(member_id, email)
        except RepositoryException as e:
            logger.info("Email update rejected: %s", e)
            return False
        return True

    def find_member_by_id(self, member_id: int) -> Member | None:
        return self.members.get_by_id(member_id)

    def list_members_sorted_by_name(self) -> list[Member]:
        return self.members.list_sorted_by_name()

    # ------------------------------------------------------------------
    # Loans
    # ------------------------------------------------------------------

    def borrow(self, isbn: str, member_id: int) -> Loan | None:
        """
        Lend a copy of ``isbn`` to ``member_id``.

        Returns None when the book or member is unknown or no copy is
        available.
        """
        try:
            return self.circulation.borrow(isbn, member_id)
        except BorrowRejectedError as e:
            logger.info("Borrow rejected (%s): %s", e.reason, e)
            return None

    def return_loan(self, loan_id: int) -> bool:
        """Close a loan; False if it is unknown or already returned."""
        try:
            self.circulation.return_loan(loan_id)
        except RepositoryException as e:
            logger.info("Return rejected: %s", e)
            return False
        return True

    def find_loan(self, loan_id: int) -> Loan | None:
        return self.circulation.get_by_id(loan_id)

    def list_active_loans_sorted_by_due_date(self) -> list[Loan]:
        return self.circulation.list_active_sorted_by_due_date()

    def list_loans_by_member(self, member_id: int) -> list[Loan]:
        """A member's loans by loan ID; empty for unknown members too."""
        return self.circulation.list_by_member(member_id)

    def compute_loan_stats_by_member(self) -> dict[int, LoanStats]:
        """Total and active loan counts for every member that has borrowed."""
        return self.circulation.compute_stats_by_member()
