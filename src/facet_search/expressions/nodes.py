"""Expressions – provider-translatable predicate nodes.

A compiled predicate is a small immutable tree. Providers translate it: the
in-memory candidate set evaluates it per item, the SQLAlchemy candidate set
turns it into column expressions. Nodes combine with ``&``, ``|`` and ``~``::

    brand = field("Brand").is_in(("X", "Y"))
    cheap = field("Price").le(100)
    predicate = brand & ~cheap
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable

from facet_search.declarations.enums import TextSearchBehavior


class TextPrimitive(str, Enum):
    """Store-specific text matching primitives."""

    ILIKE = "ILIKE"
    FREETEXT = "FREETEXT"
    CONTAINS = "CONTAINS"


class ComparisonOp(str, Enum):
    EQ = "=="
    GE = ">="
    LE = "<="


class Expression:
    """Base of every predicate node."""

    __slots__ = ()

    def __and__(self, other: "Expression") -> "Expression":
        return all_of(self, other)

    def __or__(self, other: "Expression") -> "Expression":
        return any_of(self, other)

    def __invert__(self) -> "Expression":
        return Not(self)


@dataclasses.dataclass(frozen=True)
class FieldRef:
    """A property path on the candidate, e.g. ``("Customer", "Name")``."""

    path: tuple[str, ...]

    @property
    def dotted(self) -> str:
        return ".".join(self.path)

    def is_in(self, values: Iterable[Any]) -> "InSet":
        return InSet(self, tuple(values))

    def eq(self, value: Any) -> "Compare":
        return Compare(self, ComparisonOp.EQ, value)

    def ge(self, value: Any) -> "Compare":
        return Compare(self, ComparisonOp.GE, value)

    def le(self, value: Any) -> "Compare":
        return Compare(self, ComparisonOp.LE, value)

    def matches(
        self,
        behavior: TextSearchBehavior,
        term: str,
        *,
        case_sensitive: bool = False,
    ) -> "TextMatch":
        return TextMatch(self, behavior, term, case_sensitive)

    def like(self, pattern: str, *, case_sensitive: bool = False) -> "PatternMatch":
        return PatternMatch(self, pattern, case_sensitive)

    def primitive(self, primitive: TextPrimitive, argument: str) -> "ProviderMatch":
        return ProviderMatch(self, primitive, argument)


@dataclasses.dataclass(frozen=True)
class InSet(Expression):
    field: FieldRef
    values: tuple[Any, ...]


@dataclasses.dataclass(frozen=True)
class Compare(Expression):
    field: FieldRef
    op: ComparisonOp
    value: Any


@dataclasses.dataclass(frozen=True)
class TextMatch(Expression):
    """Normalized (case-folded unless ``case_sensitive``) text comparison."""

    field: FieldRef
    behavior: TextSearchBehavior
    term: str
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True)
class PatternMatch(Expression):
    """SQL ``LIKE`` pattern with ``\\`` as escape character."""

    field: FieldRef
    pattern: str
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True)
class ProviderMatch(Expression):
    field: FieldRef
    primitive: TextPrimitive
    argument: str


@dataclasses.dataclass(frozen=True)
class And(Expression):
    operands: tuple[Expression, ...]


@dataclasses.dataclass(frozen=True)
class Or(Expression):
    operands: tuple[Expression, ...]


@dataclasses.dataclass(frozen=True)
class Not(Expression):
    operand: Expression


def field(path: str | Iterable[str]) -> FieldRef:
    """Reference a property, either dotted (``"Customer.Name"``) or as segments."""
    if isinstance(path, str):
        return FieldRef(tuple(path.split(".")))
    return FieldRef(tuple(path))


def _flatten(kind: type[And] | type[Or], operands: Iterable[Expression | None]) -> list[Expression]:
    flat: list[Expression] = []
    for operand in operands:
        if operand is None:
            continue
        if isinstance(operand, kind):
            flat.extend(operand.operands)
        else:
            flat.append(operand)
    return flat


def all_of(*operands: Expression | None) -> Expression | None:
    """Conjunction of the non-``None`` operands; ``None`` when there are none."""
    flat = _flatten(And, operands)
    if not flat:
        return None
    return flat[0] if len(flat) == 1 else And(tuple(flat))


def any_of(*operands: Expression | None) -> Expression | None:
    """Disjunction of the non-``None`` operands; ``None`` when there are none."""
    flat = _flatten(Or, operands)
    if not flat:
        return None
    return flat[0] if len(flat) == 1 else Or(tuple(flat))


__all__ = [
    "And",
    "Compare",
    "ComparisonOp",
    "Expression",
    "FieldRef",
    "InSet",
    "Not",
    "Or",
    "PatternMatch",
    "ProviderMatch",
    "TextMatch",
    "TextPrimitive",
    "all_of",
    "any_of",
    "field",
]
