"""
Circulation repository implementation for the Library Catalogue.

This repository manages the loan side of the store:

1. **Borrowing**: creating loans against available copies
2. **Returns**: closing loans and releasing copies
3. **Queries**: active loans by due date, loan history per member
4. **Statistics**: total and active loan counts per member

Borrow and return are the only operations that touch the active-loan
counter. Each one runs inside a single store transaction so the counter
always matches the loans it summarizes.
"""

import logging
from datetime import timedelta

from ..config import get_config
from ..models import Loan, LoanStats
from .repository import (
    BaseRepository,
    BorrowRejectedError,
    LoanAlreadyReturnedError,
    NotFoundError,
)
from .store import CatalogueStore

logger = logging.getLogger(__name__)


class CirculationRepository(BaseRepository[int, Loan]):
    """
    Repository for loans.

    The loan period comes from configuration unless given explicitly.
    """

    def __init__(self, store: CatalogueStore, loan_period_days: int | None = None):
        super().__init__(store)
        if loan_period_days is None:
            loan_period_days = get_config().loan_period_days
        self.loan_period = timedelta(days=loan_period_days)

    @property
    def collection(self) -> dict[int, Loan]:
        return self.store.loans

    def borrow(self, isbn: str, member_id: int) -> Loan:
        """
        Lend one copy of a book to a member.

        This is the core borrowing operation:
        1. Validates the book and the member exist
        2. Validates a copy is available
        3. Creates the loan, due ``loan_period`` after today
        4. Increments the book's active-loan counter

        All four steps happen under the store lock, so no loan can push a
        book's active count above its total copies.

        Returns:
            The created loan

        Raises:
            BorrowRejectedError: If the book or member is unknown, or no
                copies are available
        """
        with self.store.transaction():
            book = self.store.books.get(isbn)
            if book is None:
                raise BorrowRejectedError(
                    f"Book {isbn} not found", BorrowRejectedError.REASON_UNKNOWN_BOOK
                )

            if member_id not in self.store.members:
                raise BorrowRejectedError(
                    f"Member {member_id} not found", BorrowRejectedError.REASON_UNKNOWN_MEMBER
                )

            active = self.store.active_loans_by_isbn.get(isbn, 0)
            if book.total_copies - active <= 0:
                raise BorrowRejectedError(
                    f"No copies of '{book.title}' available",
                    BorrowRejectedError.REASON_UNAVAILABLE,
                )

            today = self.store.today()
            loan = Loan(
                id=self.store.next_loan_id(),
                isbn=isbn,
                member_id=member_id,
                loan_date=today,
                due_date=today + self.loan_period,
            )
            self.store.loans[loan.id] = loan
            self.store.active_loans_by_isbn[isbn] = active + 1

        logger.debug("Loan %d: %s to member %d, due %s", loan.id, isbn, member_id, loan.due_date)
        return loan

    def return_loan(self, loan_id: int) -> Loan:
        """
        Close a loan and release its copy.

        The counter is floored at 0 so a drifted counter can never go
        negative.

        Returns:
            The closed loan

        Raises:
            NotFoundError: If the loan does not exist
            LoanAlreadyReturnedError: If the loan is already closed
        """
        with self.store.transaction():
            loan = self.store.loans.get(loan_id)
            if loan is None:
                raise NotFoundError(f"Loan {loan_id} not found")
            if not loan.is_active:
                raise LoanAlreadyReturnedError(
                    f"Loan {loan_id} was already returned on {loan.return_date}"
                )

            closed = loan.returned_on(self.store.today())
            self.store.loans[loan_id] = closed
            active = self.store.active_loans_by_isbn.get(loan.isbn, 0)
            self.store.active_loans_by_isbn[loan.isbn] = max(0, active - 1)

        logger.debug("Loan %d returned on %s", loan_id, closed.return_date)
        return closed

    def list_active_sorted_by_due_date(self) -> list[Loan]:
        """Unreturned loans, earliest due date first; ties by loan ID."""
        active = [loan for loan in self.get_all() if loan.is_active]
        return sorted(active, key=lambda loan: (loan.due_date, loan.id))

    def list_by_member(self, member_id: int) -> list[Loan]:
        """
        A member's loans in creation order.

        Unknown members and members without loans both give an empty list.
        """
        loans = [loan for loan in self.get_all() if loan.member_id == member_id]
        return sorted(loans, key=lambda loan: loan.id)

    def compute_stats_by_member(self) -> dict[int, LoanStats]:
        """
        Count total and active loans per member in one pass over the loans.

        Only members with at least one loan appear in the result.
        """
        totals: dict[int, int] = {}
        actives: dict[int, int] = {}
        for loan in self.get_all():
            totals[loan.member_id] = totals.get(loan.member_id, 0) + 1
            if loan.is_active:
                actives[loan.member_id] = actives.get(loan.member_id, 0) + 1

        return {
            member_id: LoanStats(total=total, active=actives.get(member_id, 0))
            for member_id, total in totals.items()
        }
