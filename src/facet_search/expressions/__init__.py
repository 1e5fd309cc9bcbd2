"""Expressions – predicate nodes shared by compilers and candidate sets."""
from __future__ import annotations

from facet_search.expressions.evaluate import compile_predicate, evaluate
from facet_search.expressions.nodes import (
    And,
    Compare,
    ComparisonOp,
    Expression,
    FieldRef,
    InSet,
    Not,
    Or,
    PatternMatch,
    ProviderMatch,
    TextMatch,
    TextPrimitive,
    all_of,
    any_of,
    field,
)
from facet_search.expressions.patterns import (
    LIKE_ESCAPE,
    contains_pattern,
    escape_like,
    like_to_regex,
)
from facet_search.expressions.values import (
    member_values,
    read_value,
    resolve_path,
    resolve_single,
    scalar_value,
    search_term,
)

__all__ = [
    "And",
    "Compare",
    "ComparisonOp",
    "Expression",
    "FieldRef",
    "InSet",
    "LIKE_ESCAPE",
    "Not",
    "Or",
    "PatternMatch",
    "ProviderMatch",
    "TextMatch",
    "TextPrimitive",
    "all_of",
    "any_of",
    "compile_predicate",
    "contains_pattern",
    "escape_like",
    "evaluate",
    "field",
    "like_to_regex",
    "member_values",
    "read_value",
    "resolve_path",
    "resolve_single",
    "scalar_value",
    "search_term",
]
