"""Emit – SourceEmitter rendering artifacts into Python modules with Jinja2.

Templates live in ``facet_search/emit/templates``. Output depends only on
the compiled artifacts: no timestamps, declaration order throughout, so
identical specs render byte-identical modules.
"""
from __future__ import annotations

import dataclasses
from pathlib import Path, PurePosixPath
from typing import Any

import jinja2

from facet_search.compilers.aggregations import AggregationFunction, AggregationKind
from facet_search.compilers.metadata import SearchMetadata
from facet_search.compilers.predicates import QueryTransform
from facet_search.declarations.enums import FacetKind
from facet_search.errors import EmissionError
from facet_search.fulltext.dispatcher import MatchMode
from facet_search.model.spec import EntitySearchSpec
from facet_search.observability import get_logger
from facet_search.schema.filters import FilterSchema
from facet_search.schema.shapes import ScalarType, snake_case

logger = get_logger(__name__)

_SOURCE_ANNOTATIONS: dict[ScalarType, str] = {
    ScalarType.STRING: "str",
    ScalarType.INTEGER: "int",
    ScalarType.DECIMAL: "Decimal",
    ScalarType.FLOAT: "float",
    ScalarType.BOOLEAN: "bool",
    ScalarType.DATETIME: "datetime",
}

_RESULT_ANNOTATIONS: dict[AggregationKind, str] = {
    AggregationKind.COUNTS: "dict[Any, int]",
    AggregationKind.BOUNDS: "Any",
    AggregationKind.TALLY: "int",
}


@dataclasses.dataclass(frozen=True)
class EmittedSource:
    """One rendered module, addressed relative to an output root."""

    artifact: str
    module: str
    text: str

    @property
    def path(self) -> PurePosixPath:
        return PurePosixPath(*self.module.split(".")).with_suffix(".py")


def module_names(spec: EntitySearchSpec) -> dict[str, str]:
    """Dotted module name per artifact under the spec's namespace."""
    base = snake_case(spec.entity_name)
    prefix = f"{spec.namespace_hint}." if spec.namespace_hint else ""
    return {
        "filter": f"{prefix}{base}_search_filter",
        "search": f"{prefix}{base}_search",
        "aggregations": f"{prefix}{base}_facet_aggregations",
        "metadata": f"{prefix}{base}_search_metadata",
    }


def _import_line(module: str, names: set[str]) -> str | None:
    if not names:
        return None
    return f"from {module} import {', '.join(sorted(names, key=lambda n: (n.lower(), n)))}"


class SourceEmitter:
    """Render compiled artifacts with the packaged (or a custom) template set."""

    def __init__(self, templates_dir: str | Path | None = None) -> None:
        loader: jinja2.BaseLoader
        if templates_dir is None:
            loader = jinja2.PackageLoader("facet_search.emit", "templates")
        else:
            loader = jinja2.FileSystemLoader(str(templates_dir))
        self._env = jinja2.Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["py"] = repr

    def render(self, template: str, spec: EntitySearchSpec, **context: Any) -> str:
        try:
            return self._env.get_template(template).render(entity=spec.entity_name, **context)
        except jinja2.TemplateError as exc:
            raise EmissionError(spec.entity_name, template, cause=exc) from exc

    def emit(
        self,
        spec: EntitySearchSpec,
        *,
        schema: FilterSchema,
        transform: QueryTransform,
        aggregations: AggregationFunction | None = None,
        metadata: SearchMetadata | None = None,
    ) -> tuple[EmittedSource, ...]:
        modules = module_names(spec)
        sources = [
            EmittedSource("filter", modules["filter"], self.render("filter.py.j2", spec, **self._filter_context(schema))),
            EmittedSource(
                "search",
                modules["search"],
                self.render("search.py.j2", spec, **self._search_context(spec, transform)),
            ),
        ]
        if aggregations is not None:
            sources.append(
                EmittedSource(
                    "aggregations",
                    modules["aggregations"],
                    self.render("aggregations.py.j2", spec, **self._aggregations_context(aggregations)),
                )
            )
        if metadata is not None:
            sources.append(
                EmittedSource(
                    "metadata",
                    modules["metadata"],
                    self.render("metadata.py.j2", spec, **self._metadata_context(metadata)),
                )
            )
        logger.debug("sources_emitted", entity=spec.entity_name, modules=[s.module for s in sources])
        return tuple(sources)

    # ------------------------------------------------------------------
    # Per-artifact contexts
    # ------------------------------------------------------------------

    def _filter_context(self, schema: FilterSchema) -> dict[str, Any]:
        scalars = {f.type.scalar for f in schema.fields}
        fields = []
        for f in schema.fields:
            inner = _SOURCE_ANNOTATIONS[f.type.scalar]
            annotation = f"list[{inner}] | None" if f.type.is_array else f"{inner} | None"
            fields.append({"name": f.name, "annotation": annotation})
        return {
            "class_name": schema.name,
            "fields": fields,
            "needs_datetime": ScalarType.DATETIME in scalars,
            "needs_decimal": ScalarType.DECIMAL in scalars,
        }

    def _search_context(self, spec: EntitySearchSpec, transform: QueryTransform) -> dict[str, Any]:
        enums: set[str] = set()
        expressions: set[str] = set()
        fulltext: set[str] = set()

        fragments = []
        for fragment in transform.fragments:
            kind = fragment.facet.kind
            fragments.append(
                {
                    "name": fragment.facet.property_name,
                    "kind": kind.value,
                    "path": ".".join(fragment.facet.path),
                    "property_type": fragment.facet.property_type.name,
                    "fields": [f.name for f in fragment.fields],
                }
            )
            expressions |= {"field", "read_value"}
            enums.add("PropertyType")
            if kind in (FacetKind.CATEGORICAL, FacetKind.HIERARCHICAL):
                expressions.add("member_values")
            elif kind is not FacetKind.GEO:
                expressions.add("scalar_value")

        text: dict[str, Any] | None = None
        if transform.text is not None:
            plan = transform.text.plan
            targets = []
            fallback = []
            for target in transform.text.targets:
                ref = f"field({target.property_name!r})"
                fallback.append(f"{ref}.like(pattern)")
                if plan.mode is MatchMode.PATTERN:
                    targets.append(f"{ref}.like(pattern)")
                elif plan.mode is MatchMode.PRIMITIVE and plan.primitive is not None:
                    targets.append(f"{ref}.primitive(TextPrimitive.{plan.primitive.name}, argument)")
                else:
                    targets.append(
                        f"{ref}.matches(TextSearchBehavior.{target.behavior.name}, term, "
                        f"case_sensitive={target.case_sensitive})"
                    )
            text = {
                "field": transform.text.field.name,
                "mode": plan.mode.value,
                "strategy": plan.requested.value,
                "fell_back": plan.fell_back,
                "primitive": plan.primitive.name if plan.primitive else None,
                "targets": targets,
                "fallback_targets": fallback,
            }
            expressions |= {"any_of", "field", "read_value", "search_term"}
            if plan.mode is MatchMode.PATTERN:
                expressions.add("contains_pattern")
            elif plan.mode is MatchMode.PRIMITIVE:
                expressions |= {"TextPrimitive", "contains_pattern"}
                fulltext.add("primitive_argument")
            else:
                enums.add("TextSearchBehavior")

        imports = [
            _import_line("facet_search.declarations.enums", enums),
            _import_line("facet_search.expressions", expressions),
            _import_line("facet_search.fulltext", fulltext),
            "from facet_search.pagination import Page, PageRequest",
        ]
        return {
            "filter_class": transform.schema.name,
            "includes": transform.includes,
            "sortable": transform.sortable,
            "fragments": fragments,
            "geo": [f.property_name for f in spec.facets if f.kind is FacetKind.GEO],
            "text": text,
            "imports": [line for line in imports if line],
        }

    def _aggregations_context(self, aggregations: AggregationFunction) -> dict[str, Any]:
        return {
            "result_name": aggregations.result_name,
            "result_fields": [
                {"name": name, "annotation": _RESULT_ANNOTATIONS[a.kind]}
                for a in aggregations.aggregations
                for name in a.result_fields
            ],
            "aggregations": [
                {
                    "name": a.facet.property_name,
                    "kind": a.kind.value,
                    "path": a.facet.path,
                    "fields": a.result_fields,
                    "by_value": a.by_value,
                    "limit": a.facet.limit,
                }
                for a in aggregations.aggregations
            ],
            "needs_field": any(a.kind is AggregationKind.TALLY for a in aggregations.aggregations),
        }

    def _metadata_context(self, metadata: SearchMetadata) -> dict[str, Any]:
        return {
            "constant": f"{metadata.entity_name}SearchMetadata",
            "metadata": metadata,
        }


__all__ = ["EmittedSource", "SourceEmitter", "module_names"]
