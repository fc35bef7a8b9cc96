"""Fixed-size page slicing over an already ordered collection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Sequence, TypeVar

from ..errors import PageOutOfRange

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a collection plus the metadata a pager needs."""

    items: list[T]
    page: int
    page_size: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def first_index(self) -> int:
        """1-based position of the first item on the page (0 when empty)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1


def total_pages_for(total_items: int, page_size: int) -> int:
    """``ceil(total_items / page_size)``, never less than 1."""

    _check_page_size(page_size)
    return max(1, -(-total_items // page_size))


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")


def paginate(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """Return page ``page`` (1-based) of ``items``.

    Pages outside ``1..total_pages`` raise :class:`PageOutOfRange`; they are
    never clamped.
    """

    total_items = len(items)
    total_pages = total_pages_for(total_items, page_size)
    if page < 1 or page > total_pages:
        raise PageOutOfRange(page, total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=total_items,
    )


@dataclass(frozen=True)
class PaginationState:
    """Caller-owned pager position. Transitions return new states."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        _check_page_size(self.page_size)
        if self.page_size > MAX_PAGE_SIZE:
            raise ValueError(f"page_size may not exceed {MAX_PAGE_SIZE}")
        if self.page < 1:
            raise PageOutOfRange(self.page, 1)

    def with_page_size(self, page_size: int) -> "PaginationState":
        """Change the page size; the position always returns to page 1."""
        return PaginationState(page=1, page_size=page_size)

    def go_to(self, page: int, total_items: int) -> "PaginationState":
        total_pages = total_pages_for(total_items, self.page_size)
        if page < 1 or page > total_pages:
            raise PageOutOfRange(page, total_pages)
        return replace(self, page=page)

    def reset(self) -> "PaginationState":
        return replace(self, page=1)

    def slice(self, items: Sequence[T]) -> Page[T]:
        return paginate(items, self.page, self.page_size)
