"""
Library Catalogue Models.

Pydantic models for the records the catalogue keeps:
- Book: catalogue entries keyed by ISBN
- Member: registered borrowers with sequential IDs
- Loan: one borrowing of one copy, closed once on return
- LoanStats: per-member loan totals
"""

from .book import Book
from .loan import DEFAULT_LOAN_PERIOD_DAYS, Loan, LoanStats
from .member import Member

__all__ = [
    "DEFAULT_LOAN_PERIOD_DAYS",
    "Book",
    "Loan",
    "LoanStats",
    "Member",
]
