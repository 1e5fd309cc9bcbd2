"""Model – SpecBuilder: scanned declaration → :class:`EntitySearchSpec`."""
from __future__ import annotations

from typing import Any, TypeVar

from facet_search.declarations.annotations import FullTextSearch, SearchFacet, Searchable
from facet_search.declarations.enums import (
    FacetKind,
    FacetOrder,
    FilterNaming,
    FullTextStrategy,
    RangeAggregation,
    SymbolicEnum,
    TextSearchBehavior,
)
from facet_search.declarations.scanner import (
    DeclarationScanner,
    ScannedDeclaration,
    ScannedMember,
    TypeDeclaration,
)
from facet_search.errors import InvalidDeclarationError
from facet_search.model.spec import (
    EntitySearchSpec,
    FacetSpec,
    FullTextFieldSpec,
    SortableFieldSpec,
)
from facet_search.model.validation import validate_spec

E = TypeVar("E", bound=SymbolicEnum)

DEFAULT_NAMESPACE_SUFFIX = "search"


class SpecBuilder:
    """Apply default policies and resolve options into an immutable spec.

    Defaults: filter name ``{Entity}SearchFilter``, namespace
    ``{declared namespace}.search``, both generation flags on, the
    ``CONTAINS`` full-text strategy and ``DECLARED`` field naming.
    """

    def __init__(self, *, validate_dependencies: bool = True) -> None:
        self._validate_dependencies = validate_dependencies

    def build(self, scanned: ScannedDeclaration) -> EntitySearchSpec:
        options = scanned.options
        entity = scanned.name

        namespace = options.namespace or (
            f"{scanned.namespace}.{DEFAULT_NAMESPACE_SUFFIX}"
            if scanned.namespace
            else DEFAULT_NAMESPACE_SUFFIX
        )
        facets: list[FacetSpec] = []
        full_text: list[FullTextFieldSpec] = []
        sortable: list[SortableFieldSpec] = []

        for member in scanned.members:
            annotation = member.annotation
            if isinstance(annotation, SearchFacet):
                facets.append(self._facet(entity, member, annotation))
            elif isinstance(annotation, FullTextSearch):
                full_text.append(self._full_text(entity, member, annotation))
            elif isinstance(annotation, Searchable):
                sortable.append(
                    SortableFieldSpec(member.name, member.property_type, bool(annotation.sortable))
                )

        spec = EntitySearchSpec(
            entity_name=entity,
            namespace_hint=namespace,
            filter_name=options.filter_name or f"{entity}SearchFilter",
            generate_aggregations=bool(options.generate_aggregations),
            generate_metadata=bool(options.generate_metadata),
            full_text_strategy=_resolve(FullTextStrategy, options.full_text_strategy, entity, None),
            naming=_resolve(FilterNaming, options.naming, entity, None),
            facets=tuple(facets),
            full_text_fields=tuple(full_text),
            sortable_fields=tuple(sortable),
        )
        return validate_spec(spec, dependencies=self._validate_dependencies)

    def _facet(self, entity: str, member: ScannedMember, facet: SearchFacet) -> FacetSpec:
        if facet.limit < 0:
            raise InvalidDeclarationError(
                f"limit must be >= 0, got {facet.limit}", entity=entity, member=member.name
            )
        path = facet.navigation_path
        if path is not None and (not path or any(not seg for seg in path.split("."))):
            raise InvalidDeclarationError(
                f"navigation path {path!r} has an empty segment", entity=entity, member=member.name
            )
        return FacetSpec(
            property_name=member.name,
            property_type=member.property_type,
            kind=_resolve(FacetKind, facet.kind, entity, member.name),
            display_name=facet.display_name or member.name,
            order_by=_resolve(FacetOrder, facet.order_by, entity, member.name),
            limit=facet.limit,
            depends_on=facet.depends_on or None,
            is_hierarchical=bool(facet.is_hierarchical),
            range_aggregation=_resolve(RangeAggregation, facet.range_aggregation, entity, member.name),
            range_intervals=facet.range_intervals,
            navigation_path=path or None,
            auto_include=bool(facet.auto_include),
        )

    def _full_text(self, entity: str, member: ScannedMember, text: FullTextSearch) -> FullTextFieldSpec:
        if text.weight < 0:
            raise InvalidDeclarationError(
                f"weight must be >= 0, got {text.weight}", entity=entity, member=member.name
            )
        return FullTextFieldSpec(
            property_name=member.name,
            property_type=member.property_type,
            weight=float(text.weight),
            case_sensitive=bool(text.case_sensitive),
            behavior=_resolve(TextSearchBehavior, text.behavior, entity, member.name),
        )


def _resolve(enum_cls: type[E], raw: Any, entity: str, member: str | None) -> E:
    try:
        return enum_cls.parse(raw)
    except ValueError as exc:
        raise InvalidDeclarationError(str(exc), entity=entity, member=member, cause=exc) from exc


def build_spec(
    declaration: TypeDeclaration | type,
    *,
    validate_dependencies: bool = True,
) -> EntitySearchSpec:
    """Scan *declaration* and build its spec in one step."""
    scanned = DeclarationScanner().scan(declaration)
    return SpecBuilder(validate_dependencies=validate_dependencies).build(scanned)


__all__ = ["SpecBuilder", "build_spec"]
