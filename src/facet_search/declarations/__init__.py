"""Declarations – annotations, option enums and the declaration scanner."""
from facet_search.declarations.annotations import (
    FacetedSearch,
    FullTextSearch,
    SearchFacet,
    Searchable,
    faceted_search,
)
from facet_search.declarations.enums import (
    FacetKind,
    FacetOrder,
    FilterNaming,
    FullTextStrategy,
    PropertyType,
    RangeAggregation,
    TextSearchBehavior,
)
from facet_search.declarations.scanner import (
    DeclarationScanner,
    MemberDeclaration,
    ScannedDeclaration,
    ScannedMember,
    TypeDeclaration,
    declaration_from_class,
    resolve_property_type,
)

__all__ = [
    "DeclarationScanner",
    "FacetKind",
    "FacetOrder",
    "FacetedSearch",
    "FilterNaming",
    "FullTextSearch",
    "FullTextStrategy",
    "MemberDeclaration",
    "PropertyType",
    "RangeAggregation",
    "ScannedDeclaration",
    "ScannedMember",
    "SearchFacet",
    "Searchable",
    "TextSearchBehavior",
    "TypeDeclaration",
    "declaration_from_class",
    "faceted_search",
    "resolve_property_type",
]
