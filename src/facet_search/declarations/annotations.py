"""Declarations – member and type-level search annotations.

Members are annotated with ``typing.Annotated``::

    @faceted_search(filter_name="CatalogFilter")
    @dataclass
    class Product:
        name: Annotated[str, FullTextSearch()]
        brand: Annotated[str, SearchFacet(display_name="Brand")]
        price: Annotated[Decimal, SearchFacet(kind=FacetKind.RANGE)]
        rating: Annotated[int, Searchable()]

Enum-valued options may be given as members, symbolic names or ordinals;
they are resolved when the spec is built.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, TypeVar, overload

from facet_search.declarations.enums import (
    FacetKind,
    FacetOrder,
    FilterNaming,
    FullTextStrategy,
    RangeAggregation,
    TextSearchBehavior,
)

C = TypeVar("C", bound=type)

FACETED_SEARCH_ATTR = "__faceted_search__"


@dataclasses.dataclass(frozen=True)
class SearchFacet:
    """Marks a member as a facet."""

    kind: FacetKind | str | int = FacetKind.CATEGORICAL
    display_name: str | None = None
    order_by: FacetOrder | str | int = FacetOrder.COUNT
    limit: int = 0
    depends_on: str | None = None
    is_hierarchical: bool = False
    range_aggregation: RangeAggregation | str | int = RangeAggregation.AUTO
    range_intervals: str | None = None
    navigation_path: str | None = None
    auto_include: bool = True


@dataclasses.dataclass(frozen=True)
class FullTextSearch:
    """Marks a member as a full-text search target."""

    weight: float = 1.0
    case_sensitive: bool = False
    behavior: TextSearchBehavior | str | int = TextSearchBehavior.CONTAINS


@dataclasses.dataclass(frozen=True)
class Searchable:
    """Marks a member as sortable search output."""

    sortable: bool = True


@dataclasses.dataclass(frozen=True)
class FacetedSearch:
    """Type-level generation options."""

    filter_name: str | None = None
    namespace: str | None = None
    generate_aggregations: bool = True
    generate_metadata: bool = True
    full_text_strategy: FullTextStrategy | str | int = FullTextStrategy.CONTAINS
    naming: FilterNaming | str | int = FilterNaming.DECLARED


MemberAnnotation = SearchFacet | FullTextSearch | Searchable


@overload
def faceted_search(cls: C) -> C: ...


@overload
def faceted_search(cls: None = None, **options: Any) -> Callable[[C], C]: ...


def faceted_search(cls: Any = None, **options: Any) -> Any:
    """Class decorator attaching :class:`FacetedSearch` options.

    Usable bare (``@faceted_search``) or with options
    (``@faceted_search(generate_metadata=False)``).
    """
    marker = FacetedSearch(**options)

    def wrap(target: C) -> C:
        setattr(target, FACETED_SEARCH_ATTR, marker)
        return target

    if cls is not None:
        return wrap(cls)
    return wrap


__all__ = [
    "FACETED_SEARCH_ATTR",
    "FacetedSearch",
    "FullTextSearch",
    "MemberAnnotation",
    "SearchFacet",
    "Searchable",
    "faceted_search",
]
