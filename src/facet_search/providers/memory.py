"""Providers – InMemoryCandidates over plain objects or mappings."""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from facet_search.expressions.evaluate import compile_predicate
from facet_search.expressions.nodes import Expression
from facet_search.expressions.values import resolve_path, resolve_single
from facet_search.fulltext.capabilities import ProviderCapabilities
from facet_search.providers.base import order_groups

_SortKey = tuple[tuple[str, ...], bool]


class InMemoryCandidates:
    """Candidate set backed by a tuple of items.

    Items may be attribute objects or mappings. Every text primitive is
    evaluated in process, so the default capabilities include them all.
    """

    def __init__(
        self,
        items: Iterable[Any] = (),
        *,
        capabilities: ProviderCapabilities | None = None,
        _sorts: tuple[_SortKey, ...] = (),
        _includes: tuple[str, ...] = (),
    ) -> None:
        self._items = tuple(items)
        self._capabilities = capabilities or ProviderCapabilities.every()
        self._sorts = _sorts
        self._includes = _includes

    def _derive(self, items: Iterable[Any], sorts: tuple[_SortKey, ...] = ()) -> "InMemoryCandidates":
        return InMemoryCandidates(
            items,
            capabilities=self._capabilities,
            _sorts=sorts,
            _includes=self._includes,
        )

    @property
    def capabilities(self) -> ProviderCapabilities:
        return self._capabilities

    @property
    def includes(self) -> tuple[str, ...]:
        return self._includes

    def _view(self) -> list[Any]:
        items = list(self._items)
        for path, descending in reversed(self._sorts):
            present = [i for i in items if resolve_single(i, path) is not None]
            missing = [i for i in items if resolve_single(i, path) is None]
            present.sort(key=lambda i: resolve_single(i, path), reverse=descending)
            items = missing + present if descending else present + missing
        return items

    def where(self, predicate: Expression) -> "InMemoryCandidates":
        accept = compile_predicate(predicate)
        return self._derive((i for i in self._view() if accept(i)))

    def where_in_process(self, predicate: Expression) -> "InMemoryCandidates":
        return self.where(predicate)

    def include(self, path: str) -> "InMemoryCandidates":
        if path in self._includes:
            return self
        return InMemoryCandidates(
            self._items,
            capabilities=self._capabilities,
            _sorts=self._sorts,
            _includes=self._includes + (path,),
        )

    def order_by(self, path: tuple[str, ...], descending: bool = False) -> "InMemoryCandidates":
        return self._derive(self._items, self._sorts + ((tuple(path), descending),))

    def slice(self, offset: int, limit: int) -> "InMemoryCandidates":
        offset = max(offset, 0)
        return self._derive(self._view()[offset : offset + max(limit, 0)])

    def to_list(self) -> list[Any]:
        return self._view()

    def __iter__(self):
        return iter(self._view())

    def __len__(self) -> int:
        return len(self._items)

    def count(self, predicate: Expression | None = None) -> int:
        accept = compile_predicate(predicate)
        return sum(1 for i in self._items if accept(i))

    def group_count(
        self,
        path: tuple[str, ...],
        *,
        by_value: bool = False,
        limit: int = 0,
    ) -> list[tuple[Any, int]]:
        counts: Counter[Any] = Counter()
        for item in self._items:
            for value in resolve_path(item, path):
                if value is not None:
                    counts[value] += 1
        return order_groups(dict(counts), by_value=by_value, limit=limit)

    def bounds(self, path: tuple[str, ...]) -> tuple[Any, Any]:
        values = [v for i in self._items for v in resolve_path(i, path) if v is not None]
        if not values:
            return (None, None)
        return (min(values), max(values))

    def __repr__(self) -> str:
        return f"InMemoryCandidates(items={len(self._items)}, sorts={len(self._sorts)})"


__all__ = ["InMemoryCandidates"]
