"""Security sanitizer tests."""
import pytest

from bookshelf.core.exceptions import InvalidInputError
from bookshelf.core.sanitizer import (
    SecurityPassed,
    SecurityRejected,
    is_suspicious,
    require_clean_book,
    screen_book,
)


@pytest.mark.parametrize("value", [
    "<script>alert(1)</script>",
    "<img src=x>",
    "</div>",
    "<iframe",
    "javascript:alert(1)",
    "VBScript: msgbox",
    "data:text/html;base64,xyz",
    'x" onerror="alert(1)',
    "nice onmouseover=steal()",
    "1 UNION SELECT password FROM users",
    "title'; DROP TABLE books",
    "x' OR '1'='1",
    "admin'--",
    "a /* comment */ b",
    "exec xp_cmdshell",
    "line\nbreak",
    "carriage\rreturn",
    "nul\x00byte",
    "tab\there",
    "bell\x07",
    "c1\x85control",
])
def test_suspicious_values(value):
    assert is_suspicious(value)


@pytest.mark.parametrize("value", [
    "The Pragmatic Programmer",
    "O'Reilly Media",
    "Harry Potter and the Philosopher's Stone",
    "Pride & Prejudice",
    "1 < 2",
    "978-3-16-148410-0",
    "Dr. Seuss; Random House",
    "Crime and Punishment -- a novel",
    "Les Misérables",
])
def test_ordinary_values(value):
    assert not is_suspicious(value)


def test_first_offending_field_reported():
    payload = {"title": "ok", "description": "<b>bold</b>", "author": "<i>me</i>"}
    assert screen_book(payload) == SecurityRejected("author")


def test_rejected_payload_is_not_trimmed():
    payload = {"title": "  Dune  ", "publisher": "<b>x</b>"}
    screen_book(payload)
    assert payload["title"] == "  Dune  "


def test_passing_fields_trimmed_in_place():
    payload = {"title": "  Dune ", "author": " Frank Herbert", "published": 1965, "pages": 10}
    assert screen_book(payload) == SecurityPassed()
    assert payload == {"title": "Dune", "author": "Frank Herbert", "published": 1965, "pages": 10}


def test_non_string_values_skipped():
    payload = {"title": 42, "author": None, "genre": ["<script>"]}
    assert screen_book(payload).ok
    assert payload["title"] == 42


def test_unscreened_fields_ignored():
    payload = {"title": "Dune", "notes": "<script>"}
    assert screen_book(payload).ok


def test_require_clean_book_raises_with_field_only():
    with pytest.raises(InvalidInputError) as exc_info:
        require_clean_book({"isbn": "javascript:void(0)"})

    exc = exc_info.value
    assert exc.error_code == "invalid_input"
    assert exc.details == {"field": "isbn"}
    assert "javascript" not in exc.message
