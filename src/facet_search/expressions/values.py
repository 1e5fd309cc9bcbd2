"""Expressions – reading filter values and candidate properties."""
from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from facet_search.declarations.enums import PropertyType


def read_value(source: Any, name: str) -> Any:
    """Read *name* from a mapping or an attribute object; absent is ``None``."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _coerce(value: Any, property_type: PropertyType) -> Any:
    if not isinstance(value, str):
        return value
    try:
        match property_type:
            case PropertyType.INTEGER:
                return int(value)
            case PropertyType.DECIMAL:
                return Decimal(value)
            case PropertyType.FLOAT:
                return float(value)
            case PropertyType.BOOLEAN:
                lowered = value.strip().lower()
                if lowered in {"true", "1", "yes"}:
                    return True
                if lowered in {"false", "0", "no"}:
                    return False
                return value
            case PropertyType.DATE:
                return datetime.datetime.fromisoformat(value)
    except (ValueError, InvalidOperation):
        return value
    return value


_PARSED_TYPES = frozenset(
    {PropertyType.INTEGER, PropertyType.DECIMAL, PropertyType.FLOAT, PropertyType.BOOLEAN, PropertyType.DATE}
)


def scalar_value(raw: Any, property_type: PropertyType = PropertyType.STRING) -> Any:
    """Coerce a single filter value (a range bound or a boolean) to *property_type*.

    Strings that do not parse as a numeric, boolean or date type are treated
    as absent and give ``None``; non-string booleans go through ``bool``.
    """
    if raw is None:
        return None
    value = _coerce(raw, property_type)
    if isinstance(value, str) and property_type in _PARSED_TYPES:
        return None
    if property_type is PropertyType.BOOLEAN:
        return bool(value)
    return value


def member_values(raw: Any, property_type: PropertyType = PropertyType.STRING) -> tuple[Any, ...]:
    """Normalize a categorical filter value into a tuple of members.

    ``None`` and empty collections give an empty tuple; a bare string is a
    one-element set. String members are coerced to *property_type* when
    they parse, and kept verbatim otherwise.
    """
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        members: Iterable[Any] = (raw,)
    else:
        members = raw
    return tuple(_coerce(m, property_type) for m in members)


def search_term(raw: Any) -> str | None:
    """Strip the raw term; ``None``, empty and whitespace-only give ``None``."""
    if raw is None:
        return None
    term = str(raw).strip()
    return term or None


def resolve_path(item: Any, path: tuple[str, ...]) -> list[Any]:
    """Terminal values reached from *item* along *path*.

    Collections met along the way fan out, so a path through a one-to-many
    association yields one value per related item. A missing link yields
    ``[None]``.
    """
    current: list[Any] = [item]
    for segment in path:
        following: list[Any] = []
        for value in current:
            if value is None:
                following.append(None)
                continue
            nxt = value.get(segment) if isinstance(value, Mapping) else getattr(value, segment, None)
            if isinstance(nxt, (list, tuple, set, frozenset)):
                following.extend(nxt)
            else:
                following.append(nxt)
        current = following
    return current


def resolve_single(item: Any, path: tuple[str, ...]) -> Any:
    values = resolve_path(item, path)
    return values[0] if values else None


__all__ = ["member_values", "read_value", "resolve_path", "resolve_single", "scalar_value", "search_term"]
