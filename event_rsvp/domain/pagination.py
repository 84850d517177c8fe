"""Page/limit normalization shared by every list-returning read."""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar
import math

T = TypeVar("T")

MAX_LIMIT = 100
DEFAULT_LIMIT = 20


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    # Zero counts as "not supplied"
    return number if number != 0 else default


@dataclass(frozen=True)
class PageFilter:
    """Normalized page/limit pair."""

    page: int = 1
    limit: int = DEFAULT_LIMIT

    @classmethod
    def normalize(cls, page: Any = None, limit: Any = None, default_limit: int = DEFAULT_LIMIT) -> "PageFilter":
        """Clamp caller-supplied values to page >= 1 and 1 <= limit <= 100.

        Missing or non-numeric values fall back to page 1 and the default limit.
        """
        return cls(
            page=max(1, _as_int(page, 1)),
            limit=min(MAX_LIMIT, max(1, _as_int(limit, default_limit))),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total across all pages."""

    data: tuple
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: Iterable[T], total: int, page_filter: PageFilter) -> "Page[T]":
        return cls(
            data=tuple(items),
            total=total,
            page=page_filter.page,
            limit=page_filter.limit,
            total_pages=math.ceil(total / page_filter.limit),
        )

    @classmethod
    def empty(cls, page_filter: PageFilter) -> "Page[T]":
        return cls.build((), 0, page_filter)
