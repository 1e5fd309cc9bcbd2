"""Compilers – MetadataCompiler and the static facet catalog."""
from __future__ import annotations

import dataclasses

from facet_search.declarations.enums import FacetKind, FacetOrder
from facet_search.model.spec import EntitySearchSpec


@dataclasses.dataclass(frozen=True)
class FacetDescriptor:
    property_name: str
    display_name: str
    kind: FacetKind
    is_hierarchical: bool = False
    depends_on: str | None = None
    order_by: FacetOrder = FacetOrder.COUNT
    limit: int = 0
    range_intervals: str | None = None
    navigation_path: str | None = None


@dataclasses.dataclass(frozen=True)
class SearchMetadata:
    """Read-only catalog of an entity's facets, in declaration order."""

    entity_name: str
    facets: tuple[FacetDescriptor, ...] = ()
    full_text_fields: tuple[str, ...] = ()
    sortable_fields: tuple[str, ...] = ()

    def by_name(self, property_name: str) -> FacetDescriptor | None:
        return next((f for f in self.facets if f.property_name == property_name), None)

    def __iter__(self):
        return iter(self.facets)

    def __len__(self) -> int:
        return len(self.facets)


class MetadataCompiler:
    def compile(self, spec: EntitySearchSpec) -> SearchMetadata:
        return SearchMetadata(
            entity_name=spec.entity_name,
            facets=tuple(
                FacetDescriptor(
                    property_name=f.property_name,
                    display_name=f.display_name or f.property_name,
                    kind=f.kind,
                    is_hierarchical=f.is_hierarchical,
                    depends_on=f.depends_on,
                    order_by=f.order_by,
                    limit=f.limit,
                    range_intervals=f.range_intervals,
                    navigation_path=f.navigation_path,
                )
                for f in spec.facets
            ),
            full_text_fields=tuple(f.property_name for f in spec.full_text_fields),
            sortable_fields=spec.sortable_names(),
        )


__all__ = ["FacetDescriptor", "MetadataCompiler", "SearchMetadata"]
