"""
Book model for the Library Catalogue.

A book is a catalogue entry identified by its ISBN. The ISBN arrives from
the front end already validated and upper-cased; inside the catalogue it is
an opaque key and is stored exactly as given.

Books are immutable once added: title, author and copy count never change,
and books are never removed. How many copies are on the shelf is not part
of the record; it is derived from the active-loan counter the store keeps
per ISBN (see ``CatalogueStore``).
"""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """
    Represents a book in the library catalogue.

    Frozen: the store hands out the same instance it keeps.
    """

    isbn: str = Field(
        ...,
        description="Unique book identifier, used as the catalogue key",
        examples=["9780134685991", "978-0134685991", "0-13-468599-X"],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        examples=["Effective Java", "Clean Code"],
    )

    author: str = Field(
        ...,
        description="The author of the book",
        examples=["Joshua Bloch", "Robert C. Martin"],
    )

    total_copies: int = Field(
        ...,
        description="Total number of copies owned by the library",
        ge=0,
        examples=[0, 1, 5],
    )

    def describe(self, available: int) -> str:
        """Render the one-line catalogue entry shown by the front ends."""
        return (
            f"{self.isbn} | {self.title} | {self.author} | "
            f"available {available}/{self.total_copies}"
        )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "isbn": "9780134685991",
                "title": "Effective Java",
                "author": "Joshua Bloch",
                "total_copies": 2,
            }
        },
    )
