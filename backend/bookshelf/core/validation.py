"""Book payload validation.

``validate_book`` checks a submitted payload in a fixed order and returns a
single outcome: ``Valid`` with the normalized payload, or the first failure
found. Failures are small frozen dataclasses, one per kind, each carrying
only what its error response needs.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Mapping, Optional, Union

from bookshelf.core.exceptions import ValidationFailedError

# Client-settable book columns, in storage order
BOOK_FIELDS = (
    "title",
    "author",
    "published",
    "isbn",
    "genre",
    "description",
    "pages",
    "publisher",
)
REQUIRED_FIELDS = ("title", "author", "published")

MAX_TITLE_LENGTH = 1000
MIN_PUBLISHED_YEAR = -3000
FUTURE_YEAR_ALLOWANCE = 10
# books.pages is a 32-bit INTEGER column
MAX_PAGES = 2**31 - 1

# ISBN-10 or ISBN-13, bare or split by hyphens/spaces, optional "ISBN[-1x]:" prefix
ISBN_PATTERN = re.compile(
    r"(?:ISBN(?:-1[03])?:? )?"
    r"(?=[0-9X]{10}\Z|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}\Z"
    r"|97[89][0-9]{10}\Z|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}\Z)"
    r"(?:97[89][- ]?)?[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]\Z"
)


def current_year() -> int:
    return datetime.now(timezone.utc).year


def published_year_bounds(year: Optional[int] = None) -> tuple[int, int]:
    """Inclusive (min, max) range for ``published``."""
    if year is None:
        year = current_year()
    return MIN_PUBLISHED_YEAR, year + FUTURE_YEAR_ALLOWANCE


def json_kind(value: Any) -> str:
    """Name a value's kind the way a JSON client would see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_isbn(value: Any) -> bool:
    return isinstance(value, str) and ISBN_PATTERN.match(value) is not None


def _is_blank(value: Any) -> bool:
    # JSON falsy values: null, false, "", 0
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


class ValidationFailure:
    """Marker base for failed outcomes."""

    ok: ClassVar[bool] = False
    error_code: ClassVar[str]

    def details(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Valid:
    payload: dict[str, Any]

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class MissingFields(ValidationFailure):
    fields: tuple[str, ...]

    error_code: ClassVar[str] = "missing_fields"

    @property
    def message(self) -> str:
        return f"Missing required fields: {', '.join(self.fields)}"

    def details(self) -> dict[str, Any]:
        return {"fields": list(self.fields)}


@dataclass(frozen=True)
class InvalidType(ValidationFailure):
    field: str
    expected: str
    actual: str

    error_code: ClassVar[str] = "invalid_type"

    @property
    def message(self) -> str:
        return f"Field '{self.field}' must be {self.expected}, got {self.actual}"

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "expected": self.expected, "received": self.actual}


@dataclass(frozen=True)
class InvalidFormat(ValidationFailure):
    field: str

    error_code: ClassVar[str] = "invalid_format"

    @property
    def message(self) -> str:
        return f"Field '{self.field}' has an invalid format"

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


@dataclass(frozen=True)
class InvalidRange(ValidationFailure):
    field: str
    message: str

    error_code: ClassVar[str] = "invalid_range"

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


@dataclass(frozen=True)
class FieldTooLong(ValidationFailure):
    field: str
    limit: int
    actual: int

    error_code: ClassVar[str] = "field_too_long"

    @property
    def message(self) -> str:
        return (
            f"Field '{self.field}' exceeds maximum length of {self.limit} "
            f"characters (got {self.actual})"
        )

    def details(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "max_length": self.limit,
            "actual_length": self.actual,
        }


ValidationOutcome = Union[Valid, MissingFields, InvalidType, InvalidFormat, InvalidRange, FieldTooLong]


def _check_optional(field: str, value: Any) -> Optional[ValidationFailure]:
    if field == "isbn":
        if not is_valid_isbn(value):
            return InvalidFormat(field)
    elif field == "pages":
        if not is_integer(value) or value < 0:
            return InvalidType(field, "non-negative integer", json_kind(value))
        if value > MAX_PAGES:
            return InvalidRange(field, f"Page count cannot be greater than {MAX_PAGES}")
    elif not isinstance(value, str):
        return InvalidType(field, "string", json_kind(value))
    return None


def validate_book(
    payload: Mapping[str, Any],
    year: Optional[int] = None,
) -> ValidationOutcome:
    """Validate a book payload.

    Steps run in order and the first failing step decides the outcome:
    required presence (all missing fields reported together), required
    types (first mismatch), title length, optional field types in
    ``isbn, genre, description, pages, publisher`` order, then the
    published-year range.

    Args:
        payload: Field name to submitted value. Unknown keys are ignored.
        year: Reference year for the upper ``published`` bound; defaults
            to the current UTC year.
    """
    missing = tuple(f for f in REQUIRED_FIELDS if _is_blank(payload.get(f)))
    if missing:
        return MissingFields(missing)

    for field in ("title", "author"):
        if not isinstance(payload[field], str):
            return InvalidType(field, "string", json_kind(payload[field]))
    if not is_integer(payload["published"]):
        return InvalidType("published", "integer", json_kind(payload["published"]))

    title_length = len(payload["title"])
    if title_length > MAX_TITLE_LENGTH:
        return FieldTooLong("title", MAX_TITLE_LENGTH, title_length)

    for field in ("isbn", "genre", "description", "pages", "publisher"):
        value = payload.get(field)
        if value is None:
            continue
        failure = _check_optional(field, value)
        if failure is not None:
            return failure

    min_year, max_year = published_year_bounds(year)
    published = payload["published"]
    if published < min_year:
        return InvalidRange("published", f"Published year cannot be earlier than {min_year}")
    if published > max_year:
        return InvalidRange("published", f"Published year cannot be later than {max_year}")

    return Valid({f: payload[f] for f in BOOK_FIELDS if f in payload})


def require_valid_book(
    payload: Mapping[str, Any],
    year: Optional[int] = None,
) -> dict[str, Any]:
    """Validate ``payload`` and return the normalized fields.

    Raises:
        ValidationFailedError: carrying the failing outcome.
    """
    outcome = validate_book(payload, year)
    if not outcome.ok:
        raise ValidationFailedError(outcome)
    return outcome.payload
