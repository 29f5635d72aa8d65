"""
Input validation for the Library Catalogue front ends.

The catalogue itself treats ISBNs and emails as plain strings. Their shape
is checked here, before any value reaches ``CatalogueService``:

- ISBN: 10 to 17 characters of digits, ``X`` and hyphens, upper-cased.
  Check digits are not verified.
- Email: a local@domain address, validated with pydantic's ``EmailStr``.
"""

import re

from pydantic import EmailStr, TypeAdapter, ValidationError

ISBN_PATTERN = re.compile(r"^[0-9X-]{10,17}$", re.IGNORECASE)

_email_adapter = TypeAdapter(EmailStr)


class InvalidInputError(ValueError):
    """Raised when a value does not have the expected shape."""


def normalize_isbn(value: str) -> str:
    """
    Validate an ISBN and return it upper-cased.

    Raises:
        InvalidInputError: If the value is not 10-17 digits, X or hyphens
    """
    isbn = value.strip()
    if not isbn:
        raise InvalidInputError("Please enter a valid ISBN.")
    if not ISBN_PATTERN.match(isbn):
        raise InvalidInputError("Please enter a valid ISBN. Example: 978-0134685991")
    return isbn.upper()


def is_valid_isbn(value: str) -> bool:
    try:
        normalize_isbn(value)
    except InvalidInputError:
        return False
    return True


def normalize_email(value: str) -> str:
    """
    Validate an email address and return it stripped.

    Raises:
        InvalidInputError: If the value is not a local@domain address
    """
    email = value.strip()
    try:
        _email_adapter.validate_python(email)
    except ValidationError as e:
        raise InvalidInputError("Email looks invalid.") from e
    return email


def is_valid_email(value: str) -> bool:
    try:
        normalize_email(value)
    except InvalidInputError:
        return False
    return True
