"""
Repository base for the Library Catalogue.

The repositories are the data access layer over ``CatalogueStore``. They
keep protocol and presentation concerns out of the record-keeping code:

1. **Separation**: the text menu and the MCP tools share one set of rules
2. **Testability**: repositories work against any store, including one
   with a fixed clock
3. **Typed failures**: every rejected operation raises one of the
   exceptions below, which callers turn into ``None``/``False`` results or
   error responses

Records are frozen pydantic models, so the values returned here can be
handed straight to callers.
"""

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Generic, TypeVar

from pydantic import BaseModel

from .store import CatalogueStore

KeyType = TypeVar("KeyType", bound=Hashable)
ModelType = TypeVar("ModelType", bound=BaseModel)


class RepositoryException(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryException):
    """Raised when a member, book or loan is not found."""


class DuplicateError(RepositoryException):
    """Raised when attempting to add a book whose ISBN is already catalogued."""


class BorrowRejectedError(RepositoryException):
    """
    Raised when a borrow cannot go ahead.

    ``reason`` is one of the ``REASON_*`` constants so callers can tell an
    unknown book or member apart from a book with no copies left.
    """

    REASON_UNKNOWN_BOOK = "unknown_book"
    REASON_UNKNOWN_MEMBER = "unknown_member"
    REASON_UNAVAILABLE = "unavailable"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class LoanAlreadyReturnedError(RepositoryException):
    """Raised when returning a loan that is already closed."""


class BaseRepository(ABC, Generic[KeyType, ModelType]):
    """
    Abstract base repository providing the common read operations.

    Subclasses name the store collection they work on; lookups take the
    store lock so a read never observes a half-finished transaction.
    """

    def __init__(self, store: CatalogueStore):
        """Initialize repository with the catalogue store."""
        self.store = store

    @property
    @abstractmethod
    def collection(self) -> dict[KeyType, ModelType]:
        """Return the store collection this repository manages."""

    def get_by_id(self, key: KeyType) -> ModelType | None:
        """
        Get a record by its key.

        Returns:
            The record or None if not found
        """
        with self.store.transaction():
            return self.collection.get(key)

    def get_all(self) -> list[ModelType]:
        """Get all records in creation order."""
        with self.store.transaction():
            return list(self.collection.values())

    def exists(self, key: KeyType) -> bool:
        with self.store.transaction():
            return key in self.collection

    def count(self) -> int:
        with self.store.transaction():
            return len(self.collection)
