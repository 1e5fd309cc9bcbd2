"""Declarations – symbolic option enums.

Every enum carries its symbolic name as value, so a resolved option is
compared and rendered by name. :meth:`SymbolicEnum.parse` accepts a member,
its symbolic name or a declaration ordinal and always returns a member.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound="SymbolicEnum")


def _normalise(name: str) -> str:
    return name.replace("_", "").replace("-", "").replace(" ", "").lower()


class SymbolicEnum(str, Enum):
    @classmethod
    def parse(cls: type[E], raw: Any) -> E:
        """Resolve *raw* to a member; raises ``ValueError`` when it names none."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            raise ValueError(f"{raw!r} is not a valid {cls.__name__}")
        if isinstance(raw, int):
            members = list(cls)
            if 0 <= raw < len(members):
                return members[raw]
            raise ValueError(f"ordinal {raw} is out of range for {cls.__name__}")
        if isinstance(raw, str):
            key = _normalise(raw)
            for member in cls:
                if key in (_normalise(member.value), _normalise(member.name)):
                    return member
        raise ValueError(f"{raw!r} is not a valid {cls.__name__}")

    def __str__(self) -> str:
        return self.value


class FacetKind(SymbolicEnum):
    CATEGORICAL = "Categorical"
    RANGE = "Range"
    BOOLEAN = "Boolean"
    DATE_RANGE = "DateRange"
    HIERARCHICAL = "Hierarchical"
    GEO = "Geo"


class FacetOrder(SymbolicEnum):
    COUNT = "Count"
    VALUE = "Value"
    RELEVANCE = "Relevance"
    CUSTOM = "Custom"


class RangeAggregation(SymbolicEnum):
    AUTO = "Auto"
    CUSTOM = "Custom"
    FIXED = "Fixed"
    NONE = "None"


class TextSearchBehavior(SymbolicEnum):
    CONTAINS = "Contains"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    EXACT = "Exact"


class FullTextStrategy(SymbolicEnum):
    """How the full-text fragment is matched.

    ``CONTAINS`` honours each field's behaviour; ``LIKE`` is the universal
    wildcard pattern match every other strategy falls back to.
    """

    CONTAINS = "Contains"
    LIKE = "Like"
    SQLSERVER_FREETEXT = "SqlServerFreeText"
    SQLSERVER_CONTAINS = "SqlServerContains"
    POSTGRESQL_FULL_TEXT = "PostgreSqlFullText"
    CLIENT_SIDE = "ClientSide"


class PropertyType(SymbolicEnum):
    INTEGER = "integer"
    DECIMAL = "decimal"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    STRING = "string"
    REFERENCE = "reference"

    @property
    def is_numeric(self) -> bool:
        return self in (PropertyType.INTEGER, PropertyType.DECIMAL, PropertyType.FLOAT)


class FilterNaming(SymbolicEnum):
    """Naming convention for generated filter and result fields."""

    DECLARED = "Declared"
    SNAKE_CASE = "SnakeCase"


__all__ = [
    "FacetKind",
    "FacetOrder",
    "FilterNaming",
    "FullTextStrategy",
    "PropertyType",
    "RangeAggregation",
    "SymbolicEnum",
    "TextSearchBehavior",
]
