"""
Interactive text front end for the Library Catalogue.

A numbered menu over ``CatalogueService``. This module owns everything the
service does not do: prompting, parsing and validating input, and turning
results into one-line messages. Invalid input is re-prompted; end of input
ends the session the same way as choosing Exit.

Usage:
    library-catalogue [--log-level LEVEL] [--debug]
    python -m library_catalogue
"""

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from .config import get_config
from .service import CatalogueService
from .validators import InvalidInputError, normalize_email, normalize_isbn

logger = logging.getLogger(__name__)

MENU = """****** Menu ******
1. Add new book
2. Register member
3. List books
4. Search books by title prefix
5. Borrow book
6. Return book (by loan ID)
7. List active loans
8. List loans by member
9. Update member email
10. View member details
11. List members
0. Exit"""


class InputExhausted(Exception):
    """Raised when the input stream ends while waiting for a line."""


class MenuApp:
    """
    The menu loop and its flows.

    Input and output streams are injectable so sessions can be scripted.
    """

    def __init__(
        self,
        service: CatalogueService,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.service = service
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.actions: dict[int, Callable[[], None]] = {
            1: self.add_book,
            2: self.register_member,
            3: self.list_books,
            4: self.search_books,
            5: self.borrow_book,
            6: self.return_book,
            7: self.list_active_loans,
            8: self.list_loans_by_member,
            9: self.update_member_email,
            10: self.view_member_details,
            11: self.list_members,
        }

    def run(self) -> int:
        """Run the menu until Exit or end of input. Returns the exit status."""
        try:
            while True:
                self.say(MENU)
                choice = self.read_int("Please choose an option: ")
                if choice == 0:
                    self.say("Goodbye!")
                    return 0
                action = self.actions.get(choice)
                if action is None:
                    self.say("Invalid option!")
                    continue
                action()
        except InputExhausted:
            self.say("\nInput ended. Goodbye!")
            return 0

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    def add_book(self) -> None:
        self.say("*** Adding new book ***")
        isbn = self.read_isbn("ISBN (unique): ")
        title = self.read_non_blank("Title: ")
        author = self.read_non_blank("Author: ")
        copies = self.read_non_negative_int("Total Copies: ")

        book = self.service.add_book(isbn, title, author, copies)
        if book is None:
            self.say("A book with that ISBN already exists!")
        else:
            self.say("Book added: " + book.describe(self.service.available_copies(isbn)))

    def register_member(self) -> None:
        self.say("*** Registering member ***")
        name = self.read_non_blank("Name: ")
        email = self.read_email("Email (optional): ", required=False)
        member = self.service.register_member(name, email)
        self.say(f"Member registered. ID: {member.id}")

    def list_books(self) -> None:
        self.say("*** Listing books ***")
        books = self.service.list_books_sorted_by_title()
        if not books:
            self.say("No books found!")
            return
        for book in books:
            self.say(book.describe(self.service.available_copies(book.isbn)))

    def search_books(self) -> None:
        self.say("*** Searching books by title prefix ***")
        prefix = self.read_non_blank("Title starts with: ")
        books = self.service.search_books_by_title_prefix(prefix)
        if not books:
            self.say("No matches found!")
            return
        self.say(f"Found {len(books)}:")
        for book in books:
            self.say(book.describe(self.service.available_copies(book.isbn)))

    def borrow_book(self) -> None:
        self.say("*** Borrowing book ***")
        isbn = self.read_isbn("ISBN: ")
        member_id = self.read_int("Member ID: ")
        loan = self.service.borrow(isbn, member_id)
        if loan is None:
            self.say("Loan failed! Check: ISBN exists, member exists and copies available")
            return
        self.say("Borrowed Successfully!")
        self.say(loan.describe())

    def return_book(self) -> None:
        self.say("*** Returning book ***")
        loan_id = self.read_int("Loan ID: ")
        if self.service.return_loan(loan_id):
            self.say("Returned successfully!")
        else:
            self.say("Return failed! (loan not found or already returned)")

    def list_active_loans(self) -> None:
        self.say("*** Listing active loans ***")
        loans = self.service.list_active_loans_sorted_by_due_date()
        if not loans:
            self.say("No active loans found!")
            return
        for loan in loans:
            self.say(loan.describe())

    def list_loans_by_member(self) -> None:
        self.say("*** Loan history by Member ***")
        member_id = self.read_int("Member ID: ")
        loans = self.service.list_loans_by_member(member_id)
        if not loans:
            self.say("No loans found for that member (or member not found).")
            return
        self.say(f"Found {len(loans)}:")
        for loan in loans:
            self.say(loan.describe())

    def update_member_email(self) -> None:
        self.say("*** Updating member email ***")
        member_id = self.read_int("Member ID: ")
        email = self.read_email("New Email (blank to clear): ", required=False)
        if not self.service.update_member_email(member_id, email):
            self.say("Update failed (member not found)")
        elif email is None:
            self.say("Email cleared.")
        else:
            self.say("Email updated successfully!")

    def view_member_details(self) -> None:
        self.say("*** Viewing member details ***")
        member_id = self.read_int("Member ID: ")
        member = self.service.find_member_by_id(member_id)
        if member is None:
            self.say("Member not found!")
            return
        stats = self.service.compute_loan_stats_by_member().get(member.id)
        total = stats.total if stats else 0
        active = stats.active if stats else 0
        self.say(f"ID: {member.id}")
        self.say(f"Name: {member.name}")
        self.say(f"Email: {member.email or '(none)'}")
        self.say(f"Loans: {total} | active loans: {active}")

    def list_members(self) -> None:
        self.say("*** Listing members ***")
        members = self.service.list_members_sorted_by_name()
        if not members:
            self.say("No members found!")
            return
        all_stats = self.service.compute_loan_stats_by_member()
        for member in members:
            stats = all_stats.get(member.id)
            total = stats.total if stats else 0
            active = stats.active if stats else 0
            self.say(
                f"ID: {member.id} | Name: {member.name} | Email: {member.email or '(none)'}"
                f" | Total loans: {total} | Active loans: {active}"
            )

    # ------------------------------------------------------------------
    # Input helpers
    # ------------------------------------------------------------------

    def say(self, text: str) -> None:
        print(text, file=self.stdout)

    def read_line(self, prompt: str) -> str:
        """
        Prompt and read one stripped line.

        Raises:
            InputExhausted: At end of input
        """
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise InputExhausted
        return line.strip()

    def read_int(self, prompt: str) -> int:
        while True:
            text = self.read_line(prompt)
            try:
                return int(text)
            except ValueError:
                self.say("Please enter a valid integer.")

    def read_non_negative_int(self, prompt: str) -> int:
        while True:
            value = self.read_int(prompt)
            if value >= 0:
                return value
            self.say("Must be a non-negative integer (0 allowed).")

    def read_non_blank(self, prompt: str) -> str:
        while True:
            text = self.read_line(prompt)
            if text:
                return text
            self.say("Please enter a non-blank string.")

    def read_isbn(self, prompt: str) -> str:
        while True:
            try:
                return normalize_isbn(self.read_line(prompt))
            except InvalidInputError as e:
                self.say(str(e))

    def read_email(self, prompt: str, required: bool = True) -> str | None:
        """Read an email address; when not required, a blank line gives None."""
        while True:
            text = self.read_line(prompt)
            if not text:
                if not required:
                    return None
                self.say("Email is required.")
                continue
            try:
                return normalize_email(text)
            except InvalidInputError as e:
                hint = " Try again or leave it blank." if not required else " Try again."
                self.say(f"{e}{hint}")


def configure_logging(level: str) -> None:
    """Log to stderr so the menu owns stdout."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the text front end."""
    parser = argparse.ArgumentParser(description="Interactive library catalogue")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured logging level",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    config = get_config()
    level = "DEBUG" if args.debug else (args.log_level or config.effective_log_level)
    configure_logging(level)
    logger.debug("Loan period: %d days", config.loan_period_days)

    app = MenuApp(CatalogueService(loan_period_days=config.loan_period_days))
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
