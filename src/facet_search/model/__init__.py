"""Model – canonical search specs and their builder."""
from facet_search.model.builder import SpecBuilder, build_spec
from facet_search.model.spec import (
    EntitySearchSpec,
    FacetSpec,
    FullTextFieldSpec,
    SortableFieldSpec,
)
from facet_search.model.validation import validate_dependencies, validate_spec

__all__ = [
    "EntitySearchSpec",
    "FacetSpec",
    "FullTextFieldSpec",
    "SortableFieldSpec",
    "SpecBuilder",
    "build_spec",
    "validate_dependencies",
    "validate_spec",
]
