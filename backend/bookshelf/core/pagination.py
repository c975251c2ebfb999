"""Pagination and filter parsing for book listings."""
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from bookshelf.core.exceptions import FilterError, PaginationError
from bookshelf.core.validation import published_year_bounds

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# OFFSET is bound as a signed 64-bit value
MAX_OFFSET = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]{1,19}")


@dataclass(frozen=True)
class BookFilters:
    """Filter predicates shared by the count and page queries."""

    year: Optional[int] = None
    genre: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None

    def supplied(self) -> dict[str, Any]:
        """Only the filters the client actually sent."""
        return {name: value for name, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class FetchSpec:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    filters: BookFilters = field(default_factory=BookFilters)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    total: int
    total_pages: int
    current_page: int
    limit: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int]
    prev_page: Optional[int]


def _parse_int(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not _INTEGER.fullmatch(raw):
        return None
    return int(raw)


def _param(params: Mapping[str, Optional[str]], name: str) -> Optional[str]:
    # Empty values count as not supplied
    value = params.get(name)
    if value is None or value.strip() == "":
        return None
    return value


def build_fetch_spec(
    params: Mapping[str, Optional[str]],
    year: Optional[int] = None,
) -> FetchSpec:
    """Turn list query parameters into a bounded ``FetchSpec``.

    Raises:
        PaginationError: ``page`` below 1 or ``limit`` outside [1, 100].
        FilterError: ``year`` not an integer within the published range.
    """
    page = DEFAULT_PAGE
    raw_page = _param(params, "page")
    if raw_page is not None:
        page = _parse_int(raw_page)
        if page is None or page < 1:
            raise PaginationError("Page must be an integer greater than or equal to 1", "page")

    limit = DEFAULT_LIMIT
    raw_limit = _param(params, "limit")
    if raw_limit is not None:
        limit = _parse_int(raw_limit)
        if limit is None or not 1 <= limit <= MAX_LIMIT:
            raise PaginationError(f"Limit must be an integer between 1 and {MAX_LIMIT}", "limit")

    if (page - 1) * limit > MAX_OFFSET:
        raise PaginationError("Page is out of range", "page")

    year_filter = None
    raw_year = _param(params, "year")
    if raw_year is not None:
        min_year, max_year = published_year_bounds(year)
        year_filter = _parse_int(raw_year)
        if year_filter is None or not min_year <= year_filter <= max_year:
            raise FilterError(f"Year must be an integer between {min_year} and {max_year}", "year")

    genre = _param(params, "genre")
    author = _param(params, "author")
    isbn = _param(params, "isbn")

    return FetchSpec(
        page=page,
        limit=limit,
        filters=BookFilters(
            year=year_filter,
            genre=genre.strip() if genre else None,
            author=author.strip() if author else None,
            isbn=isbn.strip() if isbn else None,
        ),
    )


def build_pagination(total: int, page: int, limit: int) -> Pagination:
    """Pagination metadata for one page of ``total`` matching rows."""
    total_pages = (total + limit - 1) // limit
    has_next = page < total_pages
    has_prev = page > 1
    return Pagination(
        total=total,
        total_pages=total_pages,
        current_page=page,
        limit=limit,
        has_next=has_next,
        has_prev=has_prev,
        next_page=page + 1 if has_next else None,
        prev_page=page - 1 if has_prev else None,
    )
