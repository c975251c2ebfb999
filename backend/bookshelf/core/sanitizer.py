"""Security screening of free-text book fields.

A coarse reject filter run before field validation. It is not what keeps
SQL out of the database: the store only issues parameterized queries.
"""
import re
from dataclasses import dataclass
from typing import Any, ClassVar, MutableMapping, Union

from bookshelf.core.exceptions import InvalidInputError

SCREENED_FIELDS = ("title", "author", "isbn", "genre", "description", "publisher")

SUSPICIOUS_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # Markup
        r"<\s*/?\s*[a-z!?][^>]*>",
        r"<\s*(script|iframe|object|embed|style|svg|img|link|meta)\b",
        # Script protocols
        r"\b(java|vb)script\s*:",
        r"\bdata\s*:\s*text/html",
        # Inline event handlers
        r"\bon[a-z]+\s*=",
        # SQL fragments
        r"\bunion\b\s+(all\s+)?\bselect\b",
        r";\s*(drop|delete|truncate|alter|insert|update|create|exec)\b",
        r"['\"]\s*(or|and)\s+['\"]?\w+['\"]?\s*=\s*['\"]?\w+",
        r"['\"]\s*;?\s*--",
        r"/\*.*?\*/",
        r"\b(xp|sp)_\w+",
        # C0 controls (NUL, CR, LF, tab ...), DEL and C1 controls
        r"[\x00-\x1f\x7f-\x9f]",
    )
)


@dataclass(frozen=True)
class SecurityPassed:
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class SecurityRejected:
    field: str

    ok: ClassVar[bool] = False


SecurityOutcome = Union[SecurityPassed, SecurityRejected]


def is_suspicious(value: str) -> bool:
    return any(pattern.search(value) for pattern in SUSPICIOUS_PATTERNS)


def screen_book(payload: MutableMapping[str, Any]) -> SecurityOutcome:
    """Screen the string fields of ``payload``.

    Fields are checked in ``SCREENED_FIELDS`` order and the first match
    rejects the whole payload. Values that are not strings are left for the
    field validator. When every field passes, string values are stripped
    of surrounding whitespace in place.
    """
    for field in SCREENED_FIELDS:
        value = payload.get(field)
        if isinstance(value, str) and is_suspicious(value):
            return SecurityRejected(field)

    for field in SCREENED_FIELDS:
        value = payload.get(field)
        if isinstance(value, str):
            payload[field] = value.strip()
    return SecurityPassed()


def require_clean_book(payload: MutableMapping[str, Any]) -> None:
    """Screen ``payload`` in place.

    Raises:
        InvalidInputError: naming the offending field only.
    """
    outcome = screen_book(payload)
    if not outcome.ok:
        raise InvalidInputError(outcome.field)
