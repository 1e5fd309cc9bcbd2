"""Compilers – AggregationCompiler and the AggregationFunction artifact."""
from __future__ import annotations

import dataclasses
import functools
from enum import Enum
from typing import Any

from facet_search.declarations.enums import FacetKind, FacetOrder, FilterNaming
from facet_search.expressions.nodes import field
from facet_search.model.spec import EntitySearchSpec, FacetSpec
from facet_search.providers.base import Candidates
from facet_search.schema.shapes import snake_case


class AggregationKind(str, Enum):
    COUNTS = "counts"
    BOUNDS = "bounds"
    TALLY = "tally"


_DECLARED_RESULT_NAMES: dict[AggregationKind, tuple[str, ...]] = {
    AggregationKind.COUNTS: ("{name}",),
    AggregationKind.BOUNDS: ("{name}Min", "{name}Max"),
    AggregationKind.TALLY: ("{name}TrueCount", "{name}FalseCount"),
}

_SNAKE_RESULT_NAMES: dict[AggregationKind, tuple[str, ...]] = {
    AggregationKind.COUNTS: ("{name}",),
    AggregationKind.BOUNDS: ("{name}_min", "{name}_max"),
    AggregationKind.TALLY: ("{name}_true_count", "{name}_false_count"),
}


def aggregation_kind(kind: FacetKind) -> AggregationKind | None:
    match kind:
        case FacetKind.CATEGORICAL | FacetKind.HIERARCHICAL:
            return AggregationKind.COUNTS
        case FacetKind.RANGE | FacetKind.DATE_RANGE:
            return AggregationKind.BOUNDS
        case FacetKind.BOOLEAN:
            return AggregationKind.TALLY
    return None


@dataclasses.dataclass(frozen=True)
class FacetAggregation:
    facet: FacetSpec
    kind: AggregationKind
    result_fields: tuple[str, ...]

    @property
    def by_value(self) -> bool:
        # Relevance and Custom have no runtime ranking of their own
        return self.facet.order_by is FacetOrder.VALUE

    def run(self, candidates: Candidates) -> dict[str, Any]:
        path = self.facet.path
        match self.kind:
            case AggregationKind.COUNTS:
                groups = candidates.group_count(path, by_value=self.by_value, limit=self.facet.limit)
                return {self.result_fields[0]: dict(groups)}
            case AggregationKind.BOUNDS:
                low, high = candidates.bounds(path)
                return {self.result_fields[0]: low, self.result_fields[1]: high}
            case AggregationKind.TALLY:
                target = field(path)
                return {
                    self.result_fields[0]: candidates.count(target.eq(True)),
                    self.result_fields[1]: candidates.count(target.eq(False)),
                }
        raise ValueError(f"unknown aggregation kind {self.kind!r}")


@dataclasses.dataclass(frozen=True)
class AggregationFunction:
    """``candidates -> {Entity}FacetResults`` for one entity."""

    entity_name: str
    result_name: str
    aggregations: tuple[FacetAggregation, ...]

    @property
    def result_fields(self) -> tuple[str, ...]:
        return tuple(name for a in self.aggregations for name in a.result_fields)

    def result_model(self) -> type:
        return _result_model(self.result_name, self.result_fields)

    def __call__(self, candidates: Candidates) -> Any:
        results: dict[str, Any] = {}
        for aggregation in self.aggregations:
            results.update(aggregation.run(candidates))
        return self.result_model()(**results)


@functools.lru_cache(maxsize=None)
def _result_model(name: str, fields: tuple[str, ...]) -> type:
    return dataclasses.make_dataclass(name, [(f, Any) for f in fields], frozen=True)


class AggregationCompiler:
    def compile(self, spec: EntitySearchSpec) -> AggregationFunction:
        templates = _SNAKE_RESULT_NAMES if spec.naming is FilterNaming.SNAKE_CASE else _DECLARED_RESULT_NAMES
        aggregations: list[FacetAggregation] = []
        for facet in spec.facets:
            kind = aggregation_kind(facet.kind)
            if kind is None:
                continue
            name = snake_case(facet.property_name) if spec.naming is FilterNaming.SNAKE_CASE else facet.property_name
            aggregations.append(
                FacetAggregation(
                    facet=facet,
                    kind=kind,
                    result_fields=tuple(t.format(name=name) for t in templates[kind]),
                )
            )
        return AggregationFunction(
            entity_name=spec.entity_name,
            result_name=f"{spec.entity_name}FacetResults",
            aggregations=tuple(aggregations),
        )


__all__ = [
    "AggregationCompiler",
    "AggregationFunction",
    "AggregationKind",
    "FacetAggregation",
    "aggregation_kind",
]
