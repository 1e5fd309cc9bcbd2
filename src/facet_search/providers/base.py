"""Providers – the Candidates protocol implemented by every query provider."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from facet_search.expressions.nodes import Expression
from facet_search.fulltext.capabilities import ProviderCapabilities


@runtime_checkable
class Candidates(Protocol):
    """An immutable, composable candidate set.

    Every method returns a new candidate set; the receiver is unchanged.
    Successive ``order_by`` calls add lower-priority sort keys.
    """

    @property
    def capabilities(self) -> ProviderCapabilities: ...

    def where(self, predicate: Expression) -> "Candidates": ...
    def where_in_process(self, predicate: Expression) -> "Candidates": ...
    def include(self, path: str) -> "Candidates": ...
    def order_by(self, path: tuple[str, ...], descending: bool = False) -> "Candidates": ...
    def slice(self, offset: int, limit: int) -> "Candidates": ...
    def to_list(self) -> list[Any]: ...
    def count(self, predicate: Expression | None = None) -> int: ...
    def group_count(self, path: tuple[str, ...], *, by_value: bool = False, limit: int = 0) -> list[tuple[Any, int]]: ...
    def bounds(self, path: tuple[str, ...]) -> tuple[Any, Any]: ...


def order_groups(counts: dict[Any, int], *, by_value: bool = False, limit: int = 0) -> list[tuple[Any, int]]:
    """Order value counts by count descending (value ascending on ties) or by value."""

    def value_key(value: Any) -> tuple[str, Any]:
        return (type(value).__name__, value)

    if by_value:
        ordered = sorted(counts.items(), key=lambda kv: value_key(kv[0]))
    else:
        ordered = sorted(counts.items(), key=lambda kv: (-kv[1], value_key(kv[0])))
    return ordered[:limit] if limit > 0 else ordered


__all__ = ["Candidates", "order_groups"]
