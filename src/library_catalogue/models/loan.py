"""
Loan models for the Library Catalogue.

- Loan: one borrowing of one copy of a book by one member
- LoanStats: per-member totals derived from the loan collection

A loan is created by ``borrow`` and closed exactly once by ``return_loan``.
While ``return_date`` is None the loan is active and holds one copy of its
book; once returned it stays closed for good.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_LOAN_PERIOD_DAYS = 14


class Loan(BaseModel):
    """
    Represents a single loan of a book to a member.

    The record is frozen. Returning a loan replaces the stored record with
    a copy that carries the return date.
    """

    id: int = Field(
        ...,
        description="Sequential loan ID assigned by the catalogue",
        ge=1,
        examples=[1, 2, 17],
    )

    isbn: str = Field(
        ...,
        description="ISBN of the borrowed book",
        examples=["9780134685991"],
    )

    member_id: int = Field(
        ...,
        description="ID of the borrowing member",
        ge=1,
        examples=[1, 3],
    )

    loan_date: date = Field(
        ...,
        description="Date the book was borrowed",
        examples=["2024-03-01"],
    )

    due_date: date = Field(
        ...,
        description="Date the book should be back",
        examples=["2024-03-15"],
    )

    return_date: date | None = Field(
        None,
        description="Date the book was returned; None while the loan is active",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "Loan":
        """Validate date relationships."""
        if self.due_date < self.loan_date:
            raise ValueError("Due date cannot be before loan date")
        if self.return_date is not None and self.return_date < self.loan_date:
            raise ValueError("Return date cannot be before loan date")
        return self

    @property
    def is_active(self) -> bool:
        """A loan is active until it has a return date."""
        return self.return_date is None

    @property
    def loan_period_days(self) -> int:
        return (self.due_date - self.loan_date).days

    def returned_on(self, return_date: date) -> "Loan":
        """
        Build the closed copy of this loan.

        Raises:
            ValueError: If the loan has already been returned
        """
        if not self.is_active:
            raise ValueError(f"Loan {self.id} was already returned on {self.return_date}")
        return self.model_copy(update={"return_date": return_date})

    def describe(self) -> str:
        """Render the one-line loan entry shown by the front ends."""
        status = "ACTIVE" if self.is_active else f"RETURNED ON : {self.return_date}"
        return (
            f"Loan#{self.id} | ISBN = {self.isbn} | member = {self.member_id} | "
            f"loan = {self.loan_date} | due = {self.due_date} | {status}"
        )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "id": 1,
                "isbn": "9780134685991",
                "member_id": 1,
                "loan_date": "2024-03-01",
                "due_date": "2024-03-15",
                "return_date": None,
            }
        },
    )


class LoanStats(BaseModel):
    """Loan counts for one member: every loan ever made, and the unreturned ones."""

    total: int = Field(default=0, ge=0, description="All loans ever made by the member")
    active: int = Field(default=0, ge=0, description="Loans not yet returned")

    @model_validator(mode="after")
    def validate_counts(self) -> "LoanStats":
        if self.active > self.total:
            raise ValueError("Active loans cannot exceed total loans")
        return self
