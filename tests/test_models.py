"""
Tests for the catalogue models.

These tests verify that the models:
1. Accept valid records and reject invalid ones
2. Stay immutable once created
3. Derive loan state and render the front-end lines correctly
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from library_catalogue.models import Book, Loan, LoanStats, Member


class TestBook:
    """Test suite for the Book model."""

    def test_create_valid_book(self):
        book = Book(isbn="9780134685991", title="Effective Java", author="Joshua Bloch", total_copies=2)

        assert book.isbn == "9780134685991"
        assert book.title == "Effective Java"
        assert book.author == "Joshua Bloch"
        assert book.total_copies == 2

    def test_zero_copies_allowed(self):
        book = Book(isbn="9780201633610", title="Design Patterns", author="Gamma", total_copies=0)
        assert book.total_copies == 0

    def test_negative_copies_rejected(self):
        with pytest.raises(ValidationError):
            Book(isbn="9780201633610", title="Design Patterns", author="Gamma", total_copies=-1)

    def test_book_is_frozen(self):
        book = Book(isbn="9780134685991", title="Effective Java", author="Joshua Bloch", total_copies=2)
        with pytest.raises(ValidationError):
            book.title = "Ineffective Java"

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            Book(isbn="1", title="t", author="a", total_copies=1, genre="Fiction")

    def test_describe(self):
        book = Book(isbn="9780134685991", title="Effective Java", author="Joshua Bloch", total_copies=2)
        assert book.describe(1) == "9780134685991 | Effective Java | Joshua Bloch | available 1/2"


class TestMember:
    """Test suite for the Member model."""

    def test_create_with_email(self):
        member = Member(id=1, name="Jane Doe", email="jane@example.com")
        assert member.email == "jane@example.com"
        assert member.has_email is True

    def test_email_defaults_to_none(self):
        member = Member(id=1, name="Jane Doe")
        assert member.email is None
        assert member.has_email is False

    @pytest.mark.parametrize("blank", ["", "   ", "\t"])
    def test_blank_email_is_no_email(self, blank):
        assert Member(id=1, name="Jane Doe", email=blank).email is None

    def test_email_is_stripped(self):
        assert Member(id=1, name="Jane", email="  jane@example.com ").email == "jane@example.com"

    def test_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Member(id=0, name="Nobody")

    def test_member_is_frozen(self):
        member = Member(id=1, name="Jane Doe")
        with pytest.raises(ValidationError):
            member.email = "jane@example.com"


class TestLoan:
    """Test suite for the Loan model."""

    def make_loan(self, **overrides) -> Loan:
        fields = {
            "id": 1,
            "isbn": "9780134685991",
            "member_id": 1,
            "loan_date": date(2024, 3, 1),
            "due_date": date(2024, 3, 15),
        }
        fields.update(overrides)
        return Loan(**fields)

    def test_new_loan_is_active(self):
        loan = self.make_loan()
        assert loan.is_active is True
        assert loan.return_date is None
        assert loan.loan_period_days == 14

    def test_due_date_before_loan_date_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.make_loan(due_date=date(2024, 2, 28))
        assert "before loan date" in str(exc_info.value)

    def test_return_date_before_loan_date_rejected(self):
        with pytest.raises(ValidationError):
            self.make_loan(return_date=date(2024, 2, 1))

    def test_returned_on_builds_closed_copy(self):
        loan = self.make_loan()
        closed = loan.returned_on(date(2024, 3, 10))

        assert closed.is_active is False
        assert closed.return_date == date(2024, 3, 10)
        # The original record is untouched
        assert loan.is_active is True

    def test_returned_on_twice_raises(self):
        closed = self.make_loan().returned_on(date(2024, 3, 10))
        with pytest.raises(ValueError, match="already returned"):
            closed.returned_on(date(2024, 3, 11))

    def test_describe_active(self):
        assert self.make_loan().describe() == (
            "Loan#1 | ISBN = 9780134685991 | member = 1 | "
            "loan = 2024-03-01 | due = 2024-03-15 | ACTIVE"
        )

    def test_describe_returned(self):
        closed = self.make_loan().returned_on(date(2024, 3, 1) + timedelta(days=3))
        assert closed.describe().endswith("RETURNED ON : 2024-03-04")


class TestLoanStats:
    """Test suite for LoanStats."""

    def test_defaults(self):
        stats = LoanStats()
        assert stats.total == 0
        assert stats.active == 0

    def test_active_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            LoanStats(total=1, active=2)
