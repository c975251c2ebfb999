"""Field validator tests."""
import pytest

from bookshelf.core.exceptions import ValidationFailedError
from bookshelf.core.validation import (
    FieldTooLong,
    InvalidFormat,
    InvalidRange,
    InvalidType,
    MissingFields,
    Valid,
    is_valid_isbn,
    json_kind,
    require_valid_book,
    validate_book,
)

YEAR = 2024


def book(**overrides):
    payload = {"title": "Dune", "author": "Frank Herbert", "published": 1965}
    payload.update(overrides)
    return payload


def test_valid_book_keeps_known_fields_only():
    outcome = validate_book(book(pages=412, unknown="x", id=9), year=YEAR)
    assert outcome == Valid({"title": "Dune", "author": "Frank Herbert", "published": 1965, "pages": 412})
    assert outcome.ok


@pytest.mark.parametrize("blank", [None, "", 0, False])
def test_falsy_required_values_are_missing(blank):
    outcome = validate_book(book(published=blank), year=YEAR)
    assert outcome == MissingFields(("published",))


def test_all_missing_fields_reported_together():
    outcome = validate_book({"title": "", "isbn": "bad"}, year=YEAR)
    assert outcome == MissingFields(("title", "author", "published"))
    assert not outcome.ok
    assert outcome.details() == {"fields": ["title", "author", "published"]}


def test_first_type_error_wins():
    outcome = validate_book(book(title=12, author=["x"], published="1965"), year=YEAR)
    assert outcome == InvalidType("title", "string", "integer")


@pytest.mark.parametrize("published,kind", [(True, "boolean"), (1965.0, "number"), ("1965", "string")])
def test_published_must_be_integer(published, kind):
    assert validate_book(book(published=published), year=YEAR) == InvalidType("published", "integer", kind)


def test_title_length_limit():
    assert validate_book(book(title="x" * 1000), year=YEAR).ok
    assert validate_book(book(title="x" * 1001), year=YEAR) == FieldTooLong("title", 1000, 1001)


def test_title_length_checked_before_optional_fields():
    outcome = validate_book(book(title="x" * 1001, isbn="bad"), year=YEAR)
    assert isinstance(outcome, FieldTooLong)


@pytest.mark.parametrize("isbn", [
    "978-3-16-148410-0",
    "9783161484100",
    "0-306-40615-2",
    "0306406152",
    "080442957X",
    "ISBN 978-3-16-148410-0",
    "ISBN-13: 978 3 16 148410 0",
    "ISBN-10: 0-306-40615-2",
])
def test_isbn_accepted(isbn):
    assert is_valid_isbn(isbn)
    assert validate_book(book(isbn=isbn), year=YEAR).ok


@pytest.mark.parametrize("isbn", ["not-an-isbn", "12345", "978-3-16-148410-0-1", "978316148410X", "0306406152\n", 9783161484100])
def test_isbn_rejected(isbn):
    assert validate_book(book(isbn=isbn), year=YEAR) == InvalidFormat("isbn")


def test_optional_fields_checked_in_order():
    outcome = validate_book(book(genre=1, pages=-1, publisher=2), year=YEAR)
    assert outcome == InvalidType("genre", "string", "integer")

    outcome = validate_book(book(pages=-1, publisher=2), year=YEAR)
    assert outcome == InvalidType("pages", "non-negative integer", "integer")

    outcome = validate_book(book(pages="300"), year=YEAR)
    assert outcome == InvalidType("pages", "non-negative integer", "string")


def test_null_optional_fields_are_skipped():
    outcome = validate_book(book(isbn=None, genre=None, pages=None), year=YEAR)
    assert outcome.ok


def test_zero_pages_allowed():
    assert validate_book(book(pages=0), year=YEAR).ok


def test_pages_upper_bound():
    assert validate_book(book(pages=2**31 - 1), year=YEAR).ok
    for pages in (2**31, 2**63, 10**30):
        outcome = validate_book(book(pages=pages), year=YEAR)
        assert outcome == InvalidRange("pages", "Page count cannot be greater than 2147483647")


def test_published_range():
    assert validate_book(book(published=-3000), year=YEAR).ok
    assert validate_book(book(published=YEAR + 10), year=YEAR).ok

    low = validate_book(book(published=-3001), year=YEAR)
    assert low == InvalidRange("published", "Published year cannot be earlier than -3000")

    high = validate_book(book(published=YEAR + 11), year=YEAR)
    assert high == InvalidRange("published", f"Published year cannot be later than {YEAR + 10}")


def test_range_checked_after_optional_types():
    outcome = validate_book(book(published=-5000, genre=5), year=YEAR)
    assert isinstance(outcome, InvalidType)


def test_require_valid_book_raises_with_outcome():
    with pytest.raises(ValidationFailedError) as exc_info:
        require_valid_book(book(isbn="nope"), year=YEAR)

    exc = exc_info.value
    assert exc.error_code == "invalid_format"
    assert exc.details == {"field": "isbn"}
    assert exc.outcome == InvalidFormat("isbn")


@pytest.mark.parametrize("value,kind", [
    (None, "null"),
    (True, "boolean"),
    (3, "integer"),
    (3.5, "number"),
    ("x", "string"),
    ([], "array"),
    ({}, "object"),
])
def test_json_kind(value, kind):
    assert json_kind(value) == kind
