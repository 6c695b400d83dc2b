"""Pagination parameters parsed from query strings, and page metadata."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from marketcore.responses import PaginationMeta

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationParams:
    """A requested page: 1-based page number, page size and sort key."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: str = ""

    def offset(self) -> int:
        """Number of items that come before this page."""
        return (self.page - 1) * self.page_size


def _parse_positive(text: str | None) -> int | None:
    """Return the value of a plain decimal string if it is above zero."""
    if not text or not all("0" <= ch <= "9" for ch in text):
        return None
    value = int(text)
    return value if value > 0 else None


def get_pagination_params(query: Mapping[str, str]) -> PaginationParams:
    """Read ``page``, ``pageSize`` and ``sort`` from query parameters.

    Missing or malformed numbers fall back to the defaults; the page size
    is capped at ``MAX_PAGE_SIZE``.
    """
    page = _parse_positive(query.get("page")) or 1
    page_size = _parse_positive(query.get("pageSize")) or DEFAULT_PAGE_SIZE
    page_size = min(page_size, MAX_PAGE_SIZE)
    return PaginationParams(page=page, page_size=page_size, sort=query.get("sort", ""))


def paginate(params: PaginationParams, items: Sequence[T]) -> list[T]:
    """Return the slice of ``items`` that falls on the requested page."""
    start = params.offset()
    return list(items[start:start + params.page_size])


def calculate_pagination_meta(total: int, page: int, page_size: int) -> PaginationMeta:
    """Build page metadata, rounding the page count up."""
    if page_size == 0:
        raise ValueError("page size must not be zero")
    total_pages = -(-total // page_size)
    return PaginationMeta(total=total, page=page, page_size=page_size, total_pages=total_pages)