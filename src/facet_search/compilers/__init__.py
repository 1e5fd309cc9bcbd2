"""Compilers – spec → query transform, aggregations and metadata."""
from __future__ import annotations

from facet_search.compilers.aggregations import (
    AggregationCompiler,
    AggregationFunction,
    AggregationKind,
    FacetAggregation,
    aggregation_kind,
)
from facet_search.compilers.metadata import FacetDescriptor, MetadataCompiler, SearchMetadata
from facet_search.compilers.predicates import (
    FacetFragment,
    PredicateCompiler,
    QueryTransform,
    TextFragment,
)

__all__ = [
    "AggregationCompiler",
    "AggregationFunction",
    "AggregationKind",
    "FacetAggregation",
    "FacetDescriptor",
    "FacetFragment",
    "MetadataCompiler",
    "PredicateCompiler",
    "QueryTransform",
    "SearchMetadata",
    "TextFragment",
    "aggregation_kind",
]
