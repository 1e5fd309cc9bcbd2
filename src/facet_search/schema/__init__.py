"""Schema – filter field shapes and the filter schema artifact."""
from facet_search.schema.filters import FilterSchema, compile_filter_schema
from facet_search.schema.shapes import (
    FacetShapeResolver,
    FieldRole,
    FieldType,
    FilterField,
    ScalarType,
    field_name,
    snake_case,
)

__all__ = [
    "FacetShapeResolver",
    "FieldRole",
    "FieldType",
    "FilterField",
    "FilterSchema",
    "ScalarType",
    "compile_filter_schema",
    "field_name",
    "snake_case",
]
