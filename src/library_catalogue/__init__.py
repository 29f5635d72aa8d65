"""
Library Catalogue Package.

An in-memory catalogue of books, members and loans.

Key Components:
- models: Pydantic models for books, members and loans
- database: the in-memory store and its repositories
- service: the catalogue operations used by the text front end
- config: Configuration management with pydantic-settings
- cli: interactive numbered-menu front end
- tools / server: the same operations exposed as MCP tools
"""

__version__ = "0.1.0"

from .models import Book, Loan, LoanStats, Member
from .service import CatalogueService

__all__ = [
    "Book",
    "CatalogueService",
    "Loan",
    "LoanStats",
    "Member",
    "__version__",
]
