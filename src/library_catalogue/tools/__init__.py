"""
MCP Tools for the Library Catalogue.

Each catalogue operation is exposed as a tool: a dictionary with a name,
a description, a JSON Schema for its input and an async handler. Handlers
validate their arguments, run the repository operation against the
process-wide store and return a text block with structured data, or an
error response.
"""

from .books import add_book, list_books, search_books
from .circulation import borrow_book, list_active_loans, list_member_loans, loan_stats, return_loan
from .members import get_member, list_members, register_member, update_member_email

# Registered by the server in this order
all_tools = [
    add_book,
    register_member,
    list_books,
    search_books,
    borrow_book,
    return_loan,
    list_active_loans,
    list_member_loans,
    update_member_email,
    get_member,
    list_members,
    loan_stats,
]

__all__ = [
    "add_book",
    "all_tools",
    "borrow_book",
    "get_member",
    "list_active_loans",
    "list_books",
    "list_member_loans",
    "list_members",
    "loan_stats",
    "register_member",
    "return_loan",
    "search_books",
    "update_member_email",
]
