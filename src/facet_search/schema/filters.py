"""Schema – FilterSchema artifact and its runtime filter dataclass."""
from __future__ import annotations

import dataclasses
import functools
from typing import Any, Mapping

from facet_search.errors import InvalidDeclarationError
from facet_search.model.spec import EntitySearchSpec
from facet_search.schema.shapes import FacetShapeResolver, FieldRole, FilterField


@dataclasses.dataclass(frozen=True)
class FilterSchema:
    """Ordered filter fields of one entity: search text first, then facets."""

    name: str
    fields: tuple[FilterField, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def for_facet(self, property_name: str) -> tuple[FilterField, ...]:
        return tuple(f for f in self.fields if f.facet == property_name)

    def field(self, role: FieldRole, facet: str | None = None) -> FilterField | None:
        return next((f for f in self.fields if f.role is role and f.facet == facet), None)

    def model(self) -> type:
        """The filter dataclass; every field is optional and defaults to ``None``."""
        return _filter_model(self)

    def create(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.model()(**{**(values or {}), **kwargs})


@functools.lru_cache(maxsize=None)
def _filter_model(schema: FilterSchema) -> type:
    return dataclasses.make_dataclass(
        schema.name,
        [
            (f.name, f.type.python_annotation, dataclasses.field(default=None))
            for f in schema.fields
        ],
        kw_only=True,
    )


def compile_filter_schema(spec: EntitySearchSpec) -> FilterSchema:
    resolver = FacetShapeResolver(spec.naming)
    fields: list[FilterField] = []
    if spec.full_text_fields:
        fields.append(resolver.search_text())
    for facet in spec.facets:
        fields.extend(resolver.resolve(facet))

    seen: dict[str, FilterField] = {}
    for f in fields:
        if f.name in seen:
            raise InvalidDeclarationError(
                f"Filter field '{f.name}' is produced by both "
                f"'{seen[f.name].facet or 'full text'}' and '{f.facet or 'full text'}'",
                entity=spec.entity_name,
                member=f.facet,
            )
        seen[f.name] = f
    return FilterSchema(name=spec.filter_name, fields=tuple(fields))


__all__ = ["FilterSchema", "compile_filter_schema"]
