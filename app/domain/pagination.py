"""
Filter & pagination engine
==========================
Turns loosely-typed list parameters into a bounded, validated request
and wraps query results into a page with its navigation metadata.

Repositories consume PageRequest / MovieFilters and return Page objects:

    page_request = PageRequest(page=2, limit=20)
    page = repository.find_all(filters)
    page.total_pages, page.has_next_page
"""
import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

from app.errors import ValidationError

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class PageRequest:
    """Validated page/limit pair (page >= 1, 1 <= limit <= MAX_LIMIT)"""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if not _is_int(self.page) or self.page < 1:
            raise ValidationError("Page must be an integer greater than or equal to 1")
        if not _is_int(self.limit) or self.limit < 1 or self.limit > MAX_LIMIT:
            raise ValidationError(f"Limit must be an integer between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the counts needed to navigate the rest"""

    data: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        # limit is validated upstream; the floor keeps this total even if it isn't
        return math.ceil(self.total / max(self.limit, 1))

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(data=[fn(item) for item in self.data], total=self.total, page=self.page, limit=self.limit)


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class MovieFilters:
    """
    Movie list criteria. Every supplied criterion must match (AND).

    - search: case-insensitive substring of title, description or director
    - category_id: exact category
    - genre: must be one of the movie's genres
    - year: calendar year of the release date
    - rating: exact classification (PG, R, ...)
    """

    search: Optional[str] = None
    category_id: Optional[int] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    rating: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    page_request: PageRequest = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "search", _clean_text(self.search))
        object.__setattr__(self, "genre", _clean_text(self.genre))
        object.__setattr__(self, "rating", _clean_text(self.rating))

        if self.category_id is not None and (not _is_int(self.category_id) or self.category_id < 1):
            raise ValidationError("Category id must be a positive integer")
        if self.year is not None and not _is_int(self.year):
            raise ValidationError("Year must be an integer")

        object.__setattr__(self, "page_request", PageRequest(page=self.page, limit=self.limit))
