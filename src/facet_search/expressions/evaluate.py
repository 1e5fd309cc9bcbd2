"""Expressions – in-process evaluation against plain objects and mappings."""
from __future__ import annotations

from typing import Any

from facet_search.declarations.enums import TextSearchBehavior
from facet_search.expressions.nodes import (
    And,
    Compare,
    ComparisonOp,
    Expression,
    InSet,
    Not,
    Or,
    PatternMatch,
    ProviderMatch,
    TextMatch,
    TextPrimitive,
)
from facet_search.expressions.patterns import like_to_regex
from facet_search.expressions.values import resolve_path


def _compare(value: Any, op: ComparisonOp, bound: Any) -> bool:
    if value is None:
        return False
    try:
        match op:
            case ComparisonOp.EQ:
                return bool(value == bound)
            case ComparisonOp.GE:
                return bool(value >= bound)
            case ComparisonOp.LE:
                return bool(value <= bound)
    except TypeError:
        # incomparable types never match, as a store would reject the row
        return False
    return False


def _text(value: Any, behavior: TextSearchBehavior, term: str, case_sensitive: bool) -> bool:
    if value is None:
        return False
    text = str(value)
    if not case_sensitive:
        text, term = text.lower(), term.lower()
    match behavior:
        case TextSearchBehavior.STARTS_WITH:
            return text.startswith(term)
        case TextSearchBehavior.ENDS_WITH:
            return text.endswith(term)
        case TextSearchBehavior.EXACT:
            return text == term
    return term in text


def _primitive(value: Any, primitive: TextPrimitive, argument: str) -> bool:
    if value is None:
        return False
    text = str(value).lower()
    match primitive:
        case TextPrimitive.ILIKE:
            return like_to_regex(argument).fullmatch(str(value)) is not None
        case TextPrimitive.CONTAINS:
            phrase = argument.strip().strip('"').lower()
            return phrase in text
        case TextPrimitive.FREETEXT:
            words = text.split()
            return any(any(token in word for word in words) for token in argument.lower().split())
    return False


def evaluate(expression: Expression, item: Any) -> bool:
    """Evaluate *expression* for one candidate item."""
    match expression:
        case And(operands=operands):
            return all(evaluate(o, item) for o in operands)
        case Or(operands=operands):
            return any(evaluate(o, item) for o in operands)
        case Not(operand=operand):
            return not evaluate(operand, item)
        case InSet(field=ref, values=values):
            return any(v is not None and v in values for v in resolve_path(item, ref.path))
        case Compare(field=ref, op=op, value=bound):
            return any(_compare(v, op, bound) for v in resolve_path(item, ref.path))
        case TextMatch(field=ref, behavior=behavior, term=term, case_sensitive=cs):
            return any(_text(v, behavior, term, cs) for v in resolve_path(item, ref.path))
        case PatternMatch(field=ref, pattern=pattern, case_sensitive=cs):
            regex = like_to_regex(pattern, cs)
            return any(
                v is not None and regex.fullmatch(str(v)) is not None
                for v in resolve_path(item, ref.path)
            )
        case ProviderMatch(field=ref, primitive=primitive, argument=argument):
            return any(_primitive(v, primitive, argument) for v in resolve_path(item, ref.path))
    raise TypeError(f"Cannot evaluate expression node {type(expression).__name__}")


def compile_predicate(expression: Expression | None):
    """Return a one-argument callable; ``None`` accepts every item."""
    if expression is None:
        return lambda item: True
    return lambda item: evaluate(expression, item)


__all__ = ["compile_predicate", "evaluate"]
