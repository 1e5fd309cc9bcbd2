"""facet-search – compile faceted-search declarations into query artifacts.

Annotate a domain type, generate its artifacts, and apply them to any
candidate set::

    @faceted_search
    @dataclass
    class Product:
        name: Annotated[str, FullTextSearch()]
        brand: Annotated[str, SearchFacet()]

    artifacts = SearchGenerator().generate(Product)
    found = artifacts.transform.apply(InMemoryCandidates(products), {"brand": ["X"]})
"""
from __future__ import annotations

from facet_search.compilers import (
    AggregationFunction,
    FacetDescriptor,
    QueryTransform,
    SearchMetadata,
)
from facet_search.config import GeneratorSettings, load_settings
from facet_search.declarations import (
    FacetedSearch,
    FacetKind,
    FacetOrder,
    FilterNaming,
    FullTextSearch,
    FullTextStrategy,
    RangeAggregation,
    SearchFacet,
    Searchable,
    TextSearchBehavior,
    faceted_search,
)
from facet_search.errors import (
    DeclarationError,
    FacetSearchError,
    GenerationError,
    InvalidDeclarationError,
)
from facet_search.fulltext import ProviderCapabilities
from facet_search.generator import (
    Diagnostic,
    GeneratedArtifacts,
    GenerationReport,
    SearchGenerator,
    generate,
)
from facet_search.model import EntitySearchSpec, FacetSpec, build_spec
from facet_search.pagination import Page
from facet_search.providers import InMemoryCandidates, SqlAlchemyCandidates

__version__ = "0.1.0"

__all__ = [
    "AggregationFunction",
    "DeclarationError",
    "Diagnostic",
    "EntitySearchSpec",
    "FacetDescriptor",
    "FacetKind",
    "FacetOrder",
    "FacetSearchError",
    "FacetSpec",
    "FacetedSearch",
    "FilterNaming",
    "FullTextSearch",
    "FullTextStrategy",
    "GeneratedArtifacts",
    "GenerationError",
    "GenerationReport",
    "GeneratorSettings",
    "InMemoryCandidates",
    "InvalidDeclarationError",
    "Page",
    "ProviderCapabilities",
    "QueryTransform",
    "RangeAggregation",
    "SearchFacet",
    "SearchGenerator",
    "SearchMetadata",
    "Searchable",
    "SqlAlchemyCandidates",
    "TextSearchBehavior",
    "__version__",
    "build_spec",
    "faceted_search",
    "generate",
    "load_settings",
]
