"""Pagination – PageRequest and Page."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset pagination parameters; out-of-range input is normalized, never rejected."""

    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            object.__setattr__(self, "page", 1)
        if self.size < 1:
            object.__setattr__(self, "size", DEFAULT_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclasses.dataclass
class Page(Generic[T]):
    """Offset-based page of results with computed navigation properties."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def map(self, fn: Callable[[T], Any]) -> "Page[Any]":
        """Return a new :class:`Page` with each item transformed by *fn*."""
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            size=self.size,
        )


__all__ = ["DEFAULT_PAGE_SIZE", "Page", "PageRequest"]
