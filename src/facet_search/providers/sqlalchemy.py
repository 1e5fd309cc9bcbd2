"""Providers – SqlAlchemyCandidates over a ``Select`` of a mapped class.

Expressions become column expressions. Association paths filter through
``has()`` (to-one) or ``any()`` (to-many), includes become ``selectinload``
options, and aggregations run as grouped ``SELECT`` statements over the
candidate statement as a subquery.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, ColumnElement, Select, and_, func, literal, not_, or_, select
from sqlalchemy.orm import RelationshipProperty, Session, aliased, selectinload

from facet_search.declarations.enums import TextSearchBehavior
from facet_search.expressions.nodes import (
    And,
    Compare,
    ComparisonOp,
    Expression,
    FieldRef,
    InSet,
    Not,
    Or,
    PatternMatch,
    ProviderMatch,
    TextMatch,
    TextPrimitive,
)
from facet_search.expressions.patterns import LIKE_ESCAPE
from facet_search.fulltext.capabilities import ProviderCapabilities
from facet_search.providers.memory import InMemoryCandidates
from facet_search.providers.base import order_groups


def _split(entity: Any, path: tuple[str, ...]) -> tuple[list[Any], Any]:
    """Relationship attributes along *path* and the terminal column attribute."""
    relationships: list[Any] = []
    current = entity
    for segment in path[:-1]:
        attr = getattr(current, segment)
        prop = attr.property
        if not isinstance(prop, RelationshipProperty):
            raise ValueError(f"'{segment}' is not a relationship of {current!r}")
        relationships.append(attr)
        current = prop.mapper.class_
    return relationships, getattr(current, path[-1])


def _text_condition(column: Any, behavior: TextSearchBehavior, term: str, case_sensitive: bool) -> ColumnElement[bool]:
    target = column if case_sensitive else func.lower(column)
    value = term if case_sensitive else term.lower()
    match behavior:
        case TextSearchBehavior.STARTS_WITH:
            return target.startswith(value, autoescape=True)
        case TextSearchBehavior.ENDS_WITH:
            return target.endswith(value, autoescape=True)
        case TextSearchBehavior.EXACT:
            return target == value
    return target.contains(value, autoescape=True)


def _leaf(node: Expression, column: Any) -> ColumnElement[bool]:
    match node:
        case InSet(values=values):
            return column.in_(values)
        case Compare(op=ComparisonOp.EQ, value=value):
            return column == value
        case Compare(op=ComparisonOp.GE, value=value):
            return column >= value
        case Compare(op=ComparisonOp.LE, value=value):
            return column <= value
        case TextMatch(behavior=behavior, term=term, case_sensitive=cs):
            return _text_condition(column, behavior, term, cs)
        case PatternMatch(pattern=pattern, case_sensitive=True):
            return column.like(pattern, escape=LIKE_ESCAPE)
        case PatternMatch(pattern=pattern):
            return func.lower(column).like(pattern.lower(), escape=LIKE_ESCAPE)
        case ProviderMatch(primitive=TextPrimitive.ILIKE, argument=argument):
            return column.ilike(argument, escape=LIKE_ESCAPE)
        case ProviderMatch(primitive=TextPrimitive.FREETEXT, argument=argument):
            return func.FREETEXT(column, literal(argument), type_=Boolean)
        case ProviderMatch(primitive=TextPrimitive.CONTAINS, argument=argument):
            return func.CONTAINS(column, literal(argument), type_=Boolean)
    raise TypeError(f"Cannot translate expression node {type(node).__name__}")


def to_sql(expression: Expression, entity: Any) -> ColumnElement[bool]:
    """Translate *expression* into a SQLAlchemy criterion on *entity*."""
    match expression:
        case And(operands=operands):
            return and_(*(to_sql(o, entity) for o in operands))
        case Or(operands=operands):
            return or_(*(to_sql(o, entity) for o in operands))
        case Not(operand=operand):
            return not_(to_sql(operand, entity))
    ref: FieldRef = expression.field  # type: ignore[attr-defined]
    relationships, column = _split(entity, ref.path)
    condition = _leaf(expression, column)
    for attr in reversed(relationships):
        condition = attr.any(condition) if attr.property.uselist else attr.has(condition)
    return condition


class SqlAlchemyCandidates:
    """Candidate set backed by a 2.0-style ``Select`` and a ``Session``."""

    def __init__(
        self,
        session: Session,
        model: type,
        statement: Select[Any] | None = None,
        *,
        capabilities: ProviderCapabilities | None = None,
    ) -> None:
        self._session = session
        self._model = model
        self._statement = statement if statement is not None else select(model)
        self._capabilities = capabilities

    def _derive(self, statement: Select[Any]) -> "SqlAlchemyCandidates":
        return SqlAlchemyCandidates(
            self._session, self._model, statement, capabilities=self._capabilities
        )

    @property
    def statement(self) -> Select[Any]:
        return self._statement

    @property
    def capabilities(self) -> ProviderCapabilities:
        if self._capabilities is None:
            self._capabilities = ProviderCapabilities.for_dialect(self._session.get_bind().dialect.name)
        return self._capabilities

    def where(self, predicate: Expression) -> "SqlAlchemyCandidates":
        return self._derive(self._statement.where(to_sql(predicate, self._model)))

    def where_in_process(self, predicate: Expression) -> "InMemoryCandidates":
        return InMemoryCandidates(self.to_list(), capabilities=self.capabilities).where(predicate)

    def include(self, path: str) -> "SqlAlchemyCandidates":
        segments = path.split(".")
        current = self._model
        option = None
        for segment in segments:
            attr = getattr(current, segment)
            option = selectinload(attr) if option is None else option.selectinload(attr)
            current = attr.property.mapper.class_
        return self._derive(self._statement.options(option))

    def order_by(self, path: tuple[str, ...], descending: bool = False) -> "SqlAlchemyCandidates":
        statement = self._statement
        current: Any = self._model
        for segment in path[:-1]:
            attr = getattr(current, segment)
            target = aliased(attr.property.mapper.class_)
            statement = statement.outerjoin(attr.of_type(target))
            current = target
        column = getattr(current, path[-1])
        return self._derive(statement.order_by(column.desc() if descending else column.asc()))

    def slice(self, offset: int, limit: int) -> "SqlAlchemyCandidates":
        return self._derive(self._statement.offset(max(offset, 0)).limit(max(limit, 0)))

    def to_list(self) -> list[Any]:
        return list(self._session.scalars(self._statement).all())

    def count(self, predicate: Expression | None = None) -> int:
        statement = self._statement if predicate is None else self.where(predicate).statement
        subquery = statement.subquery()
        return int(self._session.scalar(select(func.count()).select_from(subquery)) or 0)

    def _aggregate(self, path: tuple[str, ...], build: Any) -> tuple[Select[Any], Any]:
        """A SELECT of ``build(column)`` over the candidate statement as a subquery."""
        entity: Any = aliased(self._model, self._statement.subquery())
        joins: list[Any] = []
        current: Any = entity
        for segment in path[:-1]:
            attr = getattr(current, segment)
            target = aliased(attr.property.mapper.class_)
            joins.append(attr.of_type(target))
            current = target
        column = getattr(current, path[-1])
        statement = select(*build(column)).select_from(entity)
        for join in joins:
            statement = statement.join(join)
        return statement, column

    def group_count(
        self,
        path: tuple[str, ...],
        *,
        by_value: bool = False,
        limit: int = 0,
    ) -> list[tuple[Any, int]]:
        statement, column = self._aggregate(path, lambda column: (column, func.count()))
        statement = statement.where(column.is_not(None)).group_by(column)
        counts = {value: count for value, count in self._session.execute(statement)}
        return order_groups(counts, by_value=by_value, limit=limit)

    def bounds(self, path: tuple[str, ...]) -> tuple[Any, Any]:
        statement, _ = self._aggregate(path, lambda column: (func.min(column), func.max(column)))
        low, high = self._session.execute(statement).one()
        return (low, high)

    def __repr__(self) -> str:
        return f"SqlAlchemyCandidates(model={self._model.__name__})"


__all__ = ["SqlAlchemyCandidates", "to_sql"]
