"""
Storage package for the Library Catalogue.

This package provides:
- The in-memory store and its process-wide instance (store.py)
- The repositories that implement the record-keeping rules
- The exceptions repositories raise when an operation is rejected

Nothing here is persisted; a new store starts empty with both ID
sequences at 1.
"""

from .book_repository import BookCreateSchema, BookRepository
from .circulation_repository import CirculationRepository
from .member_repository import MemberCreateSchema, MemberRepository
from .repository import (
    BaseRepository,
    BorrowRejectedError,
    DuplicateError,
    LoanAlreadyReturnedError,
    NotFoundError,
    RepositoryException,
)
from .store import CatalogueStore, get_store, reset_store

__all__ = [
    "BaseRepository",
    "BookCreateSchema",
    "BookRepository",
    "BorrowRejectedError",
    "CatalogueStore",
    "CirculationRepository",
    "DuplicateError",
    "LoanAlreadyReturnedError",
    "MemberCreateSchema",
    "MemberRepository",
    "NotFoundError",
    "RepositoryException",
    "get_store",
    "reset_store",
]
