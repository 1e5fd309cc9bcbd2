"""Full text – provider capability descriptors.

A :class:`ProviderCapabilities` names the store-specific text primitives a
query provider can translate. Host applications pass one explicitly; the
memoized :func:`probe_capabilities` is the fallback and only inspects which
database drivers are importable.
"""
from __future__ import annotations

import dataclasses
import functools
import importlib.util

from facet_search.expressions.nodes import TextPrimitive
from facet_search.observability import get_logger

logger = get_logger(__name__)

_POSTGRESQL_DRIVERS = ("psycopg", "psycopg2", "asyncpg", "pg8000")
_SQLSERVER_DRIVERS = ("pyodbc", "pymssql", "aioodbc")

_DIALECT_PRIMITIVES: dict[str, frozenset[TextPrimitive]] = {
    "postgresql": frozenset({TextPrimitive.ILIKE}),
    "mssql": frozenset({TextPrimitive.FREETEXT, TextPrimitive.CONTAINS}),
}


@dataclasses.dataclass(frozen=True)
class ProviderCapabilities:
    """The text primitives available to one query provider."""

    name: str = "generic"
    primitives: frozenset[TextPrimitive] = frozenset()

    def supports(self, primitive: TextPrimitive) -> bool:
        return primitive in self.primitives

    def merge(self, other: "ProviderCapabilities") -> "ProviderCapabilities":
        return ProviderCapabilities(
            name=self.name if self.name == other.name else f"{self.name}+{other.name}",
            primitives=self.primitives | other.primitives,
        )

    @classmethod
    def none(cls) -> "ProviderCapabilities":
        return cls()

    @classmethod
    def every(cls) -> "ProviderCapabilities":
        return cls(name="in-process", primitives=frozenset(TextPrimitive))

    @classmethod
    def for_dialect(cls, dialect_name: str) -> "ProviderCapabilities":
        """Capabilities of a SQLAlchemy dialect, e.g. ``"postgresql"`` or ``"mssql"``."""
        return cls(name=dialect_name, primitives=_DIALECT_PRIMITIVES.get(dialect_name, frozenset()))


def _installed(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


@functools.lru_cache(maxsize=1)
def probe_capabilities() -> ProviderCapabilities:
    """Process-wide capabilities inferred from installed database drivers.

    Computed once; never raises. Prefer passing explicit capabilities.
    """
    found = ProviderCapabilities.none()
    if any(_installed(m) for m in _POSTGRESQL_DRIVERS):
        found = found.merge(ProviderCapabilities.for_dialect("postgresql"))
    if any(_installed(m) for m in _SQLSERVER_DRIVERS):
        found = found.merge(ProviderCapabilities.for_dialect("mssql"))
    logger.debug(
        "capabilities_probed",
        provider=found.name,
        primitives=sorted(p.value for p in found.primitives),
    )
    return found


__all__ = ["ProviderCapabilities", "probe_capabilities"]
