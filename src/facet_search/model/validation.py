"""Model – structural checks on a built spec."""
from __future__ import annotations

from facet_search.errors import InvalidDeclarationError
from facet_search.model.spec import EntitySearchSpec


def validate_unique_names(spec: EntitySearchSpec) -> None:
    seen: set[str] = set()
    for facet in spec.facets:
        if facet.property_name in seen:
            raise InvalidDeclarationError(
                f"Facet '{facet.property_name}' is declared more than once",
                entity=spec.entity_name,
                member=facet.property_name,
            )
        seen.add(facet.property_name)


def validate_dependencies(spec: EntitySearchSpec) -> None:
    """Reject ``depends_on`` references that are dangling, self-referential or cyclic."""
    edges: dict[str, str] = {}
    names = {f.property_name for f in spec.facets}
    for facet in spec.facets:
        target = facet.depends_on
        if target is None:
            continue
        if target == facet.property_name:
            raise InvalidDeclarationError(
                f"Facet '{target}' depends on itself",
                entity=spec.entity_name,
                member=target,
            )
        if target not in names:
            raise InvalidDeclarationError(
                f"Facet '{facet.property_name}' depends on unknown facet '{target}'",
                entity=spec.entity_name,
                member=facet.property_name,
            )
        edges[facet.property_name] = target

    # each facet has at most one outgoing edge, so walking the chain finds any cycle
    for start in edges:
        visited = [start]
        current = edges.get(start)
        while current is not None:
            if current in visited:
                cycle = " -> ".join(visited[visited.index(current):] + [current])
                raise InvalidDeclarationError(
                    f"Facet dependency cycle: {cycle}",
                    entity=spec.entity_name,
                    member=start,
                    detail={"cycle": cycle},
                )
            visited.append(current)
            current = edges.get(current)


def validate_spec(spec: EntitySearchSpec, *, dependencies: bool = True) -> EntitySearchSpec:
    validate_unique_names(spec)
    if dependencies:
        validate_dependencies(spec)
    return spec


__all__ = ["validate_dependencies", "validate_spec", "validate_unique_names"]
