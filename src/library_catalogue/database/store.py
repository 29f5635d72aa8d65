"""
In-memory store for the Library Catalogue.

The store is the single owner of every record. It holds:

1. ``books``: Book records keyed by ISBN
2. ``members``: Member records keyed by member ID
3. ``loans``: Loan records keyed by loan ID
4. ``active_loans_by_isbn``: the number of unreturned loans per ISBN

plus the two ID sequences and the clock that supplies "today".

All dictionaries keep insertion order, which is creation order for every
collection; the repositories rely on that for stable sorting.

The active-loan counter is derived state. It must always equal the number
of loans for that ISBN with no return date, so it is only ever touched
inside ``transaction()`` together with the loan collection.
"""

import logging
import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from datetime import date

from ..models import Book, Loan, Member

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


class CatalogueStore:
    """
    Owns the catalogue's records, ID sequences and lock.

    One re-entrant lock guards the whole store: collections, counters and
    both ID sequences.
    """

    def __init__(self, clock: Clock | None = None):
        """
        Initialize an empty store.

        Args:
            clock: Callable returning today's date. Defaults to ``date.today``.
        """
        self.books: dict[str, Book] = {}
        self.members: dict[int, Member] = {}
        self.loans: dict[int, Loan] = {}
        self.active_loans_by_isbn: dict[str, int] = {}

        self._clock: Clock = clock or date.today
        self._next_member_id = 1
        self._next_loan_id = 1
        self._lock = threading.RLock()

    def today(self) -> date:
        """Current date as seen by the catalogue."""
        return self._clock()

    @contextmanager
    def transaction(self) -> Generator["CatalogueStore", None, None]:
        """
        Provide an exclusive scope over the whole store.

        ```python
        with store.transaction():
            if store.active_loans_by_isbn[isbn] < book.total_copies:
                ...
        ```

        The lock is re-entrant, so repository methods that open a
        transaction may call each other.
        """
        with self._lock:
            yield self

    def next_member_id(self) -> int:
        """Take the next member ID. IDs start at 1 and are never reused."""
        with self._lock:
            member_id = self._next_member_id
            self._next_member_id += 1
            return member_id

    def next_loan_id(self) -> int:
        """Take the next loan ID. IDs start at 1 and are never reused."""
        with self._lock:
            loan_id = self._next_loan_id
            self._next_loan_id += 1
            return loan_id

    def counts(self) -> dict[str, int]:
        """Collection sizes, for logging and health checks."""
        with self._lock:
            return {
                "books": len(self.books),
                "members": len(self.members),
                "loans": len(self.loans),
                "active_loans": sum(self.active_loans_by_isbn.values()),
            }


# Global store instance shared by the MCP tools
_store: CatalogueStore | None = None


def get_store(clock: Clock | None = None) -> CatalogueStore:
    """
    Get the global store instance.

    Args:
        clock: Clock for the store (only used on first call)

    Returns:
        The store singleton
    """
    global _store  # noqa: PLW0603 - Singleton pattern for the process-wide store

    if _store is None:
        _store = CatalogueStore(clock)
        logger.debug("Created process-wide catalogue store")

    return _store


def reset_store() -> None:
    """
    Drop the global store.

    The next ``get_store()`` starts from empty collections and restarts both
    ID sequences at 1. Used by tests and on server start.
    """
    global _store  # noqa: PLW0603 - Singleton pattern for the process-wide store
    _store = None
