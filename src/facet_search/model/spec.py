"""Model – immutable search specification values.

Every spec is a frozen dataclass of tuples, so two specs built from the same
declaration compare equal and hash alike; the generator keys its artifact
cache on :class:`EntitySearchSpec`.
"""
from __future__ import annotations

import dataclasses

from facet_search.declarations.enums import (
    FacetKind,
    FacetOrder,
    FilterNaming,
    FullTextStrategy,
    PropertyType,
    RangeAggregation,
    TextSearchBehavior,
)


@dataclasses.dataclass(frozen=True)
class FacetSpec:
    property_name: str
    property_type: PropertyType
    kind: FacetKind = FacetKind.CATEGORICAL
    display_name: str = ""
    order_by: FacetOrder = FacetOrder.COUNT
    limit: int = 0
    depends_on: str | None = None
    is_hierarchical: bool = False
    range_aggregation: RangeAggregation = RangeAggregation.AUTO
    range_intervals: str | None = None
    navigation_path: str | None = None
    auto_include: bool = True

    @property
    def path(self) -> tuple[str, ...]:
        """Segments the predicate reads: the navigation path or the property itself."""
        if self.navigation_path:
            return tuple(self.navigation_path.split("."))
        return (self.property_name,)

    @property
    def root_navigation(self) -> str | None:
        path = self.path
        return path[0] if len(path) > 1 else None

    @property
    def requires_include(self) -> bool:
        return self.auto_include and self.root_navigation is not None


@dataclasses.dataclass(frozen=True)
class FullTextFieldSpec:
    property_name: str
    property_type: PropertyType = PropertyType.STRING
    weight: float = 1.0
    case_sensitive: bool = False
    behavior: TextSearchBehavior = TextSearchBehavior.CONTAINS


@dataclasses.dataclass(frozen=True)
class SortableFieldSpec:
    property_name: str
    property_type: PropertyType = PropertyType.STRING
    sortable: bool = True


@dataclasses.dataclass(frozen=True)
class EntitySearchSpec:
    entity_name: str
    namespace_hint: str
    filter_name: str
    generate_aggregations: bool = True
    generate_metadata: bool = True
    full_text_strategy: FullTextStrategy = FullTextStrategy.CONTAINS
    naming: FilterNaming = FilterNaming.DECLARED
    facets: tuple[FacetSpec, ...] = ()
    full_text_fields: tuple[FullTextFieldSpec, ...] = ()
    sortable_fields: tuple[SortableFieldSpec, ...] = ()

    def facet(self, property_name: str) -> FacetSpec | None:
        return next((f for f in self.facets if f.property_name == property_name), None)

    def required_includes(self) -> tuple[str, ...]:
        """Root navigation segments to eager-load, first occurrence order."""
        seen: dict[str, None] = {}
        for facet in self.facets:
            if facet.requires_include:
                seen.setdefault(facet.root_navigation, None)  # type: ignore[arg-type]
        return tuple(seen)

    def sortable_names(self) -> tuple[str, ...]:
        return tuple(f.property_name for f in self.sortable_fields if f.sortable)


__all__ = ["EntitySearchSpec", "FacetSpec", "FullTextFieldSpec", "SortableFieldSpec"]
