"""Compilers – PredicateCompiler and the QueryTransform artifact.

Each facet compiles to one fragment plan; a plan turns filter values into a
predicate or ``None`` when its value is absent. The same plans drive the
runtime :class:`QueryTransform` and the emitted ``<entity>_search.py``
module, so both apply identical semantics.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from facet_search.declarations.enums import FacetKind, PropertyType
from facet_search.expressions.nodes import Expression, all_of, field
from facet_search.expressions.values import member_values, read_value, scalar_value, search_term
from facet_search.fulltext.capabilities import ProviderCapabilities
from facet_search.fulltext.dispatcher import FullTextPlan, FullTextStrategyDispatcher
from facet_search.model.spec import EntitySearchSpec, FacetSpec, FullTextFieldSpec
from facet_search.observability import get_logger
from facet_search.pagination import Page, PageRequest
from facet_search.providers.base import Candidates
from facet_search.schema.filters import FilterSchema, compile_filter_schema
from facet_search.schema.shapes import FieldRole, FilterField

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class FacetFragment:
    """Predicate plan for one facet."""

    facet: FacetSpec
    fields: tuple[FilterField, ...]

    @property
    def active(self) -> bool:
        """Geo facets carry a filter shape but no predicate."""
        return self.facet.kind is not FacetKind.GEO

    def build(self, values: Any) -> Expression | None:
        target = field(self.facet.path)
        match self.facet.kind:
            case FacetKind.CATEGORICAL | FacetKind.HIERARCHICAL:
                members = member_values(
                    read_value(values, self.fields[0].name), self.facet.property_type
                )
                return target.is_in(members) if members else None
            case FacetKind.RANGE | FacetKind.DATE_RANGE:
                low = scalar_value(read_value(values, self.fields[0].name), self.facet.property_type)
                high = scalar_value(read_value(values, self.fields[1].name), self.facet.property_type)
                return all_of(
                    target.ge(low) if low is not None else None,
                    target.le(high) if high is not None else None,
                )
            case FacetKind.BOOLEAN:
                value = scalar_value(read_value(values, self.fields[0].name), PropertyType.BOOLEAN)
                return target.eq(value) if value is not None else None
        return None


@dataclasses.dataclass(frozen=True)
class TextFragment:
    """Predicate plan for the search-term field."""

    field: FilterField
    targets: tuple[FullTextFieldSpec, ...]
    plan: FullTextPlan

    def term(self, values: Any) -> str | None:
        return search_term(read_value(values, self.field.name))

    def build(self, values: Any, capabilities: ProviderCapabilities | None = None) -> Expression | None:
        """The OR of per-field matches, or ``None`` when the term is absent.

        With *capabilities*, a provider primitive they lack is replaced by
        the ``LIKE`` pattern match.
        """
        term = self.term(values)
        if term is None:
            return None
        plan = self.plan if capabilities is None else self.plan.for_capabilities(capabilities)
        return plan.build(self.targets, term)


@dataclasses.dataclass(frozen=True)
class QueryTransform:
    """``(candidates, filter_values) -> candidates'`` for one entity.

    ``filter_values`` may be a filter dataclass instance, any attribute
    object, a mapping, or ``None`` (identity).
    """

    entity_name: str
    schema: FilterSchema
    includes: tuple[str, ...] = ()
    fragments: tuple[FacetFragment, ...] = ()
    text: TextFragment | None = None
    sortable: tuple[str, ...] = ()

    def predicate(self, values: Any) -> Expression | None:
        """The translatable predicate for *values*; client-side text is excluded."""
        if values is None:
            return None
        parts = [f.build(values) for f in self.fragments]
        if self.text is not None and not self.text.plan.in_process:
            parts.append(self.text.build(values))
        return all_of(*parts)

    def apply(self, candidates: Candidates, values: Any) -> Candidates:
        if values is None:
            return candidates
        for path in self.includes:
            candidates = candidates.include(path)
        for fragment in self.fragments:
            condition = fragment.build(values)
            if condition is not None:
                candidates = candidates.where(condition)
        if self.text is not None:
            condition = self.text.build(values, candidates.capabilities)
            if condition is not None:
                if self.text.plan.in_process:
                    candidates = candidates.where_in_process(condition)
                else:
                    candidates = candidates.where(condition)
        return candidates

    __call__ = apply

    def sort(self, candidates: Candidates, field_name: str | None, descending: bool = False) -> Candidates:
        """Order by a sortable property; unknown or non-sortable names are ignored."""
        if not field_name or field_name not in self.sortable:
            if field_name:
                logger.debug("sort_field_ignored", entity=self.entity_name, field=field_name)
            return candidates
        return candidates.order_by((field_name,), descending)

    def page(self, candidates: Candidates, page: int = 1, size: int = 10) -> Page[Any]:
        request = PageRequest(page=page, size=size)
        total = candidates.count()
        items = candidates.slice(request.offset, request.size).to_list()
        return Page(items=items, total=total, page=request.page, size=request.size)


class PredicateCompiler:
    """Compile an :class:`EntitySearchSpec` into a :class:`QueryTransform`."""

    def __init__(self, dispatcher: FullTextStrategyDispatcher | None = None) -> None:
        self._dispatcher = dispatcher or FullTextStrategyDispatcher()

    @property
    def dispatcher(self) -> FullTextStrategyDispatcher:
        return self._dispatcher

    def compile(self, spec: EntitySearchSpec, schema: FilterSchema | None = None) -> QueryTransform:
        schema = schema or compile_filter_schema(spec)
        fragments = tuple(
            FacetFragment(facet=facet, fields=schema.for_facet(facet.property_name))
            for facet in spec.facets
        )
        text: TextFragment | None = None
        search_field = schema.field(FieldRole.SEARCH_TEXT)
        if spec.full_text_fields and search_field is not None:
            text = TextFragment(
                field=search_field,
                targets=spec.full_text_fields,
                plan=self._dispatcher.resolve(spec.full_text_strategy),
            )
        return QueryTransform(
            entity_name=spec.entity_name,
            schema=schema,
            includes=spec.required_includes(),
            fragments=tuple(f for f in fragments if f.active),
            text=text,
            sortable=spec.sortable_names(),
        )


__all__ = ["FacetFragment", "PredicateCompiler", "QueryTransform", "TextFragment"]
