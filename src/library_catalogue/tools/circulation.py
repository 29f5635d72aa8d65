"""
Circulation tools for the Library Catalogue MCP server.

1. borrow_book: Lend a copy to a member, due after the loan period
2. return_loan: Close a loan by ID and release its copy
3. list_active_loans: Unreturned loans by due date
4. list_member_loans: A member's loan history
5. loan_stats: Total and active loan counts per member

Borrow and return run as single store transactions in the repository, so
concurrent tool calls can never lend more copies than a book has.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..database import (
    BorrowRejectedError,
    CirculationRepository,
    RepositoryException,
    get_store,
)
from ..models import Loan
from .books import isbn_field_validator
from .common import error_result, parse_arguments, text_result

logger = logging.getLogger(__name__)


def loan_data(loan: Loan) -> dict[str, Any]:
    data = loan.model_dump(mode="json")
    data["is_active"] = loan.is_active
    return data


# =============================================================================
# BORROW
# =============================================================================


class BorrowBookInput(BaseModel):
    """Input schema for the borrow_book tool."""

    isbn: str = Field(
        ...,
        description="ISBN of the book to borrow",
        examples=["9780134685991"],
    )

    member_id: int = Field(..., description="ID of the borrowing member", ge=1, examples=[1])

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        return isbn_field_validator(v)


async def borrow_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the borrow_book tool.

    Rejections (unknown book, unknown member, no copies left) come back as
    error responses naming the reason.
    """
    params = parse_arguments(BorrowBookInput, arguments, "borrow_book")
    if isinstance(params, dict):
        return params

    try:
        loan = CirculationRepository(get_store()).borrow(params.isbn, params.member_id)
    except BorrowRejectedError as e:
        logger.info("borrow_book rejected (%s): %s", e.reason, e)
        return error_result(f"Loan failed: {e}")

    return text_result(
        f"Borrowed successfully!\n{loan.describe()}",
        {"loan": loan_data(loan)},
    )


# =============================================================================
# RETURN
# =============================================================================


class ReturnLoanInput(BaseModel):
    """Input schema for the return_loan tool."""

    loan_id: int = Field(..., description="ID of the loan to close", ge=1, examples=[1])


async def return_loan_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the return_loan tool."""
    params = parse_arguments(ReturnLoanInput, arguments, "return_loan")
    if isinstance(params, dict):
        return params

    try:
        loan = CirculationRepository(get_store()).return_loan(params.loan_id)
    except RepositoryException as e:
        logger.info("return_loan rejected: %s", e)
        return error_result(f"Return failed: {e}")

    return text_result("Returned successfully!", {"loan": loan_data(loan)})


# =============================================================================
# LOAN QUERIES
# =============================================================================


async def list_active_loans_handler(arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Handler for the list_active_loans tool. Takes no arguments."""
    loans = CirculationRepository(get_store()).list_active_sorted_by_due_date()
    if not loans:
        return text_result("No active loans found!", {"loans": []})
    return text_result(
        "\n".join(loan.describe() for loan in loans),
        {"loans": [loan_data(loan) for loan in loans]},
    )


class ListMemberLoansInput(BaseModel):
    """Input schema for the list_member_loans tool."""

    member_id: int = Field(..., description="ID of the member", ge=1, examples=[1])


async def list_member_loans_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the list_member_loans tool."""
    params = parse_arguments(ListMemberLoansInput, arguments, "list_member_loans")
    if isinstance(params, dict):
        return params

    loans = CirculationRepository(get_store()).list_by_member(params.member_id)
    if not loans:
        return text_result(
            "No loans found for that member (or member not found).", {"loans": []}
        )
    lines = [f"Found {len(loans)}:"]
    lines.extend(loan.describe() for loan in loans)
    return text_result("\n".join(lines), {"loans": [loan_data(loan) for loan in loans]})


async def loan_stats_handler(arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Handler for the loan_stats tool. Takes no arguments."""
    stats = CirculationRepository(get_store()).compute_stats_by_member()
    if not stats:
        return text_result("No loans recorded yet.", {"stats": {}})

    lines = [
        f"Member {member_id}: {s.total} loans, {s.active} active"
        for member_id, s in sorted(stats.items())
    ]
    return text_result(
        "\n".join(lines),
        {"stats": {str(member_id): s.model_dump() for member_id, s in stats.items()}},
    )


# =============================================================================
# TOOL DEFINITIONS
# =============================================================================

borrow_book = {
    "name": "borrow_book",
    "description": (
        "Lend one copy of a book to a member. Fails when the book or member is "
        "unknown or every copy is already on loan. Due date is the loan date plus "
        "the configured loan period (14 days by default)."
    ),
    "inputSchema": BorrowBookInput.model_json_schema(),
    "handler": borrow_book_handler,
}

return_loan = {
    "name": "return_loan",
    "description": "Return a loan by ID. A loan can only be returned once.",
    "inputSchema": ReturnLoanInput.model_json_schema(),
    "handler": return_loan_handler,
}

list_active_loans = {
    "name": "list_active_loans",
    "description": "List unreturned loans, earliest due date first.",
    "inputSchema": {"type": "object", "properties": {}},
    "handler": list_active_loans_handler,
}

list_member_loans = {
    "name": "list_member_loans",
    "description": "List every loan a member has made, oldest first.",
    "inputSchema": ListMemberLoansInput.model_json_schema(),
    "handler": list_member_loans_handler,
}

loan_stats = {
    "name": "loan_stats",
    "description": "Total and active loan counts for every member who has borrowed.",
    "inputSchema": {"type": "object", "properties": {}},
    "handler": loan_stats_handler,
}
