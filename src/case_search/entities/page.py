"""Pagination value objects shared by every query path."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class PageRequest:
    """A validated page/limit pair.

    Use PageRequest.create() to build one from raw caller input; it clamps
    instead of failing.
    """

    page: int
    limit: int

    @classmethod
    def create(
        cls,
        page: int | None,
        limit: int | None,
        default_limit: int,
        max_limit: int,
    ) -> "PageRequest":
        """Clamp raw input to page >= 1 and limit in [1, max_limit].

        The limit never exceeds MAX_PAGE_SIZE, whatever max_limit says.

        Args:
            page: Requested page number (None or < 1 -> 1)
            limit: Requested page size (None -> default_limit)
            default_limit: Page size used when none was requested
            max_limit: Upper bound for the page size

        Returns:
            PageRequest with clamped values
        """
        page = page if page is not None and page >= 1 else 1
        if limit is None:
            limit = default_limit
        limit = max(MIN_PAGE_SIZE, min(limit, max_limit, MAX_PAGE_SIZE))
        return cls(page=page, limit=limit)

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end_index(self) -> int:
        return self.page * self.limit


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of results plus the pagination metadata.

    total_pages == 0 means the query matched nothing; it is not an error.
    """

    items: tuple[T, ...]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_items(cls, items: Sequence[T], request: PageRequest) -> "PageResult[T]":
        """Slice the full result list down to the requested page."""
        total_items = len(items)
        end_index = request.end_index
        return cls(
            items=tuple(items[request.start_index : end_index]),
            current_page=request.page,
            total_pages=math.ceil(total_items / request.limit),
            total_items=total_items,
            items_per_page=request.limit,
            has_next_page=end_index < total_items,
            has_previous_page=request.page > 1,
        )
