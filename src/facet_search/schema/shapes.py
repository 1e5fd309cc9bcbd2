"""Schema – FacetShapeResolver: facet kind → generated filter fields.

The mapping is the single source of truth for filter shapes::

    Categorical   {name}                                     list[str]
    Range         Min{name}, Max{name}                       property's numeric type
    Boolean       {name}                                     bool | None
    DateRange     {name}From, {name}To                       datetime | None
    Hierarchical  {name}                                     list[str]
    Geo           {name}Latitude, {name}Longitude, {name}RadiusKm
                                                             float, float, float | None

New kinds extend the table; existing rows never change.
"""
from __future__ import annotations

import dataclasses
import datetime
import re
from decimal import Decimal
from enum import Enum
from typing import Any

from facet_search.declarations.enums import FacetKind, FilterNaming, PropertyType
from facet_search.model.spec import FacetSpec


class ScalarType(str, Enum):
    STRING = "str"
    INTEGER = "int"
    DECIMAL = "Decimal"
    FLOAT = "float"
    BOOLEAN = "bool"
    DATETIME = "datetime"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]


_PYTHON_TYPES: dict[ScalarType, type] = {
    ScalarType.STRING: str,
    ScalarType.INTEGER: int,
    ScalarType.DECIMAL: Decimal,
    ScalarType.FLOAT: float,
    ScalarType.BOOLEAN: bool,
    ScalarType.DATETIME: datetime.datetime,
}

_PROPERTY_SCALARS: dict[PropertyType, ScalarType] = {
    PropertyType.INTEGER: ScalarType.INTEGER,
    PropertyType.DECIMAL: ScalarType.DECIMAL,
    PropertyType.FLOAT: ScalarType.FLOAT,
    PropertyType.BOOLEAN: ScalarType.BOOLEAN,
    PropertyType.DATE: ScalarType.DATETIME,
    PropertyType.STRING: ScalarType.STRING,
    PropertyType.REFERENCE: ScalarType.STRING,
}


def scalar_for(property_type: PropertyType) -> ScalarType:
    return _PROPERTY_SCALARS[property_type]


class FieldRole(str, Enum):
    VALUES = "values"
    MIN = "min"
    MAX = "max"
    EQUALS = "equals"
    FROM = "from"
    TO = "to"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    RADIUS_KM = "radius_km"
    SEARCH_TEXT = "search_text"


@dataclasses.dataclass(frozen=True)
class FieldType:
    scalar: ScalarType
    is_array: bool = False
    nullable: bool = False

    @property
    def annotation(self) -> str:
        """Source annotation of the (always optional) filter field."""
        inner = f"list[{self.scalar.value}]" if self.is_array else self.scalar.value
        return f"{inner} | None"

    @property
    def python_annotation(self) -> Any:
        inner: Any = list[self.scalar.python_type] if self.is_array else self.scalar.python_type  # type: ignore[misc]
        return inner | None


@dataclasses.dataclass(frozen=True)
class FilterField:
    name: str
    role: FieldRole
    type: FieldType
    facet: str | None = None


_STRING_ARRAY = FieldType(ScalarType.STRING, is_array=True)
_NULLABLE_BOOL = FieldType(ScalarType.BOOLEAN, nullable=True)
_NULLABLE_DATETIME = FieldType(ScalarType.DATETIME, nullable=True)
_FLOAT = FieldType(ScalarType.FLOAT)
_NULLABLE_FLOAT = FieldType(ScalarType.FLOAT, nullable=True)

_DECLARED_NAMES: dict[FieldRole, str] = {
    FieldRole.VALUES: "{name}",
    FieldRole.EQUALS: "{name}",
    FieldRole.MIN: "Min{name}",
    FieldRole.MAX: "Max{name}",
    FieldRole.FROM: "{name}From",
    FieldRole.TO: "{name}To",
    FieldRole.LATITUDE: "{name}Latitude",
    FieldRole.LONGITUDE: "{name}Longitude",
    FieldRole.RADIUS_KM: "{name}RadiusKm",
}

_SNAKE_NAMES: dict[FieldRole, str] = {
    FieldRole.VALUES: "{name}",
    FieldRole.EQUALS: "{name}",
    FieldRole.MIN: "min_{name}",
    FieldRole.MAX: "max_{name}",
    FieldRole.FROM: "{name}_from",
    FieldRole.TO: "{name}_to",
    FieldRole.LATITUDE: "{name}_latitude",
    FieldRole.LONGITUDE: "{name}_longitude",
    FieldRole.RADIUS_KM: "{name}_radius_km",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).replace(".", "_").lower()


def field_name(role: FieldRole, name: str, naming: FilterNaming) -> str:
    """Render the field name for *role* of property *name* under *naming*."""
    if naming is FilterNaming.SNAKE_CASE:
        return _SNAKE_NAMES[role].format(name=snake_case(name))
    return _DECLARED_NAMES[role].format(name=name)


def search_text_name(naming: FilterNaming) -> str:
    return "search_text" if naming is FilterNaming.SNAKE_CASE else "SearchText"


class FacetShapeResolver:
    """Pure mapping from a facet's kind to its filter fields."""

    def __init__(self, naming: FilterNaming = FilterNaming.DECLARED) -> None:
        self._naming = naming

    def roles(self, facet: FacetSpec) -> tuple[tuple[FieldRole, FieldType], ...]:
        match facet.kind:
            case FacetKind.CATEGORICAL | FacetKind.HIERARCHICAL:
                return ((FieldRole.VALUES, _STRING_ARRAY),)
            case FacetKind.RANGE:
                numeric = FieldType(scalar_for(facet.property_type))
                return ((FieldRole.MIN, numeric), (FieldRole.MAX, numeric))
            case FacetKind.BOOLEAN:
                return ((FieldRole.EQUALS, _NULLABLE_BOOL),)
            case FacetKind.DATE_RANGE:
                return ((FieldRole.FROM, _NULLABLE_DATETIME), (FieldRole.TO, _NULLABLE_DATETIME))
            case FacetKind.GEO:
                return (
                    (FieldRole.LATITUDE, _FLOAT),
                    (FieldRole.LONGITUDE, _FLOAT),
                    (FieldRole.RADIUS_KM, _NULLABLE_FLOAT),
                )
        raise ValueError(f"no filter shape for facet kind {facet.kind!r}")

    def resolve(self, facet: FacetSpec) -> tuple[FilterField, ...]:
        return tuple(
            FilterField(
                name=field_name(role, facet.property_name, self._naming),
                role=role,
                type=field_type,
                facet=facet.property_name,
            )
            for role, field_type in self.roles(facet)
        )

    def search_text(self) -> FilterField:
        return FilterField(
            name=search_text_name(self._naming),
            role=FieldRole.SEARCH_TEXT,
            type=FieldType(ScalarType.STRING, nullable=True),
        )


__all__ = [
    "FacetShapeResolver",
    "FieldRole",
    "FieldType",
    "FilterField",
    "ScalarType",
    "field_name",
    "scalar_for",
    "search_text_name",
    "snake_case",
]
