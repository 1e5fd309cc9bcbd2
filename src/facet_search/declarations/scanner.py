"""Declarations – DeclarationScanner.

Reads one domain-type declaration and lists the members that carry a
recognized search annotation. Pure read: no defaults are applied here.
"""
from __future__ import annotations

import dataclasses
import datetime
import enum
import types
import typing
from decimal import Decimal
from typing import Any, Union

from facet_search.declarations.annotations import (
    FACETED_SEARCH_ATTR,
    FacetedSearch,
    FullTextSearch,
    MemberAnnotation,
    SearchFacet,
    Searchable,
)
from facet_search.declarations.enums import PropertyType
from facet_search.errors import DeclarationError
from facet_search.observability import get_logger

logger = get_logger(__name__)

_TYPE_NAMES: dict[str, PropertyType] = {
    "int": PropertyType.INTEGER,
    "long": PropertyType.INTEGER,
    "decimal": PropertyType.DECIMAL,
    "float": PropertyType.FLOAT,
    "double": PropertyType.FLOAT,
    "bool": PropertyType.BOOLEAN,
    "datetime": PropertyType.DATE,
    "date": PropertyType.DATE,
    "str": PropertyType.STRING,
}


@dataclasses.dataclass(frozen=True)
class MemberDeclaration:
    """One member of a domain type as handed over by the host integration.

    ``type`` may be a :class:`PropertyType`, a Python type or a type name.
    """

    name: str
    type: Any
    annotations: tuple[Any, ...] = ()


@dataclasses.dataclass(frozen=True)
class TypeDeclaration:
    name: str
    namespace: str = ""
    annotations: tuple[Any, ...] = ()
    members: tuple[MemberDeclaration, ...] = ()


@dataclasses.dataclass(frozen=True)
class ScannedMember:
    name: str
    property_type: PropertyType
    annotation: MemberAnnotation


@dataclasses.dataclass(frozen=True)
class ScannedDeclaration:
    name: str
    namespace: str
    options: FacetedSearch
    members: tuple[ScannedMember, ...]


def resolve_property_type(hint: Any) -> PropertyType:
    """Map a declared member type onto its semantic :class:`PropertyType`."""
    if isinstance(hint, PropertyType):
        return hint
    if isinstance(hint, str):
        name = hint.strip().rstrip("?")
        try:
            return PropertyType.parse(name)
        except ValueError:
            return _TYPE_NAMES.get(name.rsplit(".", 1)[-1].lower(), PropertyType.REFERENCE)

    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return resolve_property_type(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return resolve_property_type(args[0])
        return PropertyType.REFERENCE

    if not isinstance(hint, type):
        return PropertyType.REFERENCE
    # bool is an int subclass
    if issubclass(hint, bool):
        return PropertyType.BOOLEAN
    if issubclass(hint, enum.Enum):
        return PropertyType.STRING
    if issubclass(hint, int):
        return PropertyType.INTEGER
    if issubclass(hint, Decimal):
        return PropertyType.DECIMAL
    if issubclass(hint, float):
        return PropertyType.FLOAT
    if issubclass(hint, (datetime.date, datetime.datetime)):
        return PropertyType.DATE
    if issubclass(hint, str):
        return PropertyType.STRING
    return PropertyType.REFERENCE


def declaration_from_class(cls: type) -> TypeDeclaration:
    """Build a :class:`TypeDeclaration` from a ``@faceted_search`` class.

    Members come from the class annotations in declaration order;
    ``Annotated`` metadata becomes the member's annotation tuple.
    """
    options = cls.__dict__.get(FACETED_SEARCH_ATTR)
    if options is None:
        raise DeclarationError(
            f"{cls.__qualname__} is not marked with @faceted_search",
            detail={"entity": cls.__name__},
        )
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise DeclarationError(
            f"Cannot resolve member types of {cls.__qualname__}: {exc}",
            detail={"entity": cls.__name__},
            cause=exc,
        ) from exc

    members: list[MemberDeclaration] = []
    for name, hint in hints.items():
        if typing.get_origin(hint) is typing.ClassVar:
            continue
        if typing.get_origin(hint) is typing.Annotated:
            base, *metadata = typing.get_args(hint)
            members.append(MemberDeclaration(name, base, tuple(metadata)))
        else:
            members.append(MemberDeclaration(name, hint))

    return TypeDeclaration(
        name=cls.__name__,
        namespace=cls.__module__,
        annotations=(options,),
        members=tuple(members),
    )


class DeclarationScanner:
    """Enumerate annotated members of one domain-type declaration.

    A member carrying more than one of facet / full-text / sortable keeps
    the first in the order ``SearchFacet``, ``FullTextSearch``,
    ``Searchable``; the others are dropped with a warning.
    """

    PRECEDENCE: tuple[type, ...] = (SearchFacet, FullTextSearch, Searchable)

    def scan(self, declaration: TypeDeclaration | type) -> ScannedDeclaration:
        if isinstance(declaration, type):
            declaration = declaration_from_class(declaration)

        options = next(
            (a for a in declaration.annotations if isinstance(a, FacetedSearch)),
            FacetedSearch(),
        )
        scanned: list[ScannedMember] = []
        for member in declaration.members:
            recognized = [
                annotation
                for kind in self.PRECEDENCE
                for annotation in member.annotations
                if type(annotation) is kind
            ]
            if not recognized:
                continue
            if len(recognized) > 1:
                logger.warning(
                    "conflicting_member_annotations",
                    entity=declaration.name,
                    member=member.name,
                    kept=type(recognized[0]).__name__,
                    dropped=[type(a).__name__ for a in recognized[1:]],
                )
            scanned.append(
                ScannedMember(
                    name=member.name,
                    property_type=resolve_property_type(member.type),
                    annotation=recognized[0],
                )
            )

        return ScannedDeclaration(
            name=declaration.name,
            namespace=declaration.namespace,
            options=options,
            members=tuple(scanned),
        )


__all__ = [
    "DeclarationScanner",
    "MemberDeclaration",
    "ScannedDeclaration",
    "ScannedMember",
    "TypeDeclaration",
    "declaration_from_class",
    "resolve_property_type",
]
