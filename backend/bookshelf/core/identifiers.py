"""Path identifier parsing."""
import re

from bookshelf.core.exceptions import IdTooLargeError, InvalidIdFormatError

# books.id is a 32-bit INTEGER column
MAX_BOOK_ID = 2**31 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_book_id(raw: str) -> int:
    """Parse a path segment into a book ID.

    Only ASCII decimal digits are accepted, so signs, whitespace, decimal
    points and non-ASCII digits are all rejected as a bad format.

    Raises:
        InvalidIdFormatError: not all digits, or zero.
        IdTooLargeError: above ``MAX_BOOK_ID``.
    """
    if not _DIGITS.fullmatch(raw):
        raise InvalidIdFormatError()

    digits = raw.lstrip("0")
    if not digits:
        raise InvalidIdFormatError()
    # Length check first: int() refuses very long digit strings
    if len(digits) > len(str(MAX_BOOK_ID)):
        raise IdTooLargeError(MAX_BOOK_ID)

    book_id = int(digits)
    if book_id > MAX_BOOK_ID:
        raise IdTooLargeError(MAX_BOOK_ID)
    return book_id
