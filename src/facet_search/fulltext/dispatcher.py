"""Full text – FullTextStrategyDispatcher.

Maps a declared :class:`FullTextStrategy` to a :class:`FullTextPlan`: the
predicate shape used for the search term. Provider-specific strategies need
their primitive in the dispatcher's capabilities and otherwise fall back to
the universal ``LIKE`` plan.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Sequence

from facet_search.declarations.enums import FullTextStrategy
from facet_search.expressions.nodes import Expression, TextPrimitive, any_of, field
from facet_search.expressions.patterns import contains_pattern
from facet_search.fulltext.capabilities import ProviderCapabilities, probe_capabilities
from facet_search.model.spec import FullTextFieldSpec
from facet_search.observability import get_logger

logger = get_logger(__name__)


class MatchMode(str, Enum):
    FIELD_BEHAVIOR = "field_behavior"
    PATTERN = "pattern"
    PRIMITIVE = "primitive"
    CLIENT_SIDE = "client_side"


_REQUIRED_PRIMITIVE: dict[FullTextStrategy, TextPrimitive] = {
    FullTextStrategy.SQLSERVER_FREETEXT: TextPrimitive.FREETEXT,
    FullTextStrategy.SQLSERVER_CONTAINS: TextPrimitive.CONTAINS,
    FullTextStrategy.POSTGRESQL_FULL_TEXT: TextPrimitive.ILIKE,
}


def primitive_argument(primitive: TextPrimitive, term: str) -> str:
    """Shape *term* for the provider primitive."""
    match primitive:
        case TextPrimitive.CONTAINS:
            return term if '"' in term else f'"{term}"'
        case TextPrimitive.ILIKE:
            return contains_pattern(term)
    return term


@dataclasses.dataclass(frozen=True)
class FullTextPlan:
    """How a normalized search term becomes a predicate."""

    requested: FullTextStrategy
    mode: MatchMode
    primitive: TextPrimitive | None = None
    fell_back: bool = False

    @property
    def in_process(self) -> bool:
        return self.mode is MatchMode.CLIENT_SIDE

    def for_capabilities(self, capabilities: ProviderCapabilities) -> "FullTextPlan":
        """This plan, or the ``LIKE`` fallback when *capabilities* lack its primitive."""
        if self.mode is not MatchMode.PRIMITIVE or self.primitive is None:
            return self
        if capabilities.supports(self.primitive):
            return self
        logger.debug(
            "fulltext_primitive_unsupported",
            strategy=self.requested.value,
            missing=self.primitive.value,
            provider=capabilities.name,
        )
        return FullTextPlan(self.requested, MatchMode.PATTERN, fell_back=True)

    def build(self, fields: Sequence[FullTextFieldSpec], term: str) -> Expression | None:
        """OR of the per-field matches for an already normalized *term*."""
        match self.mode:
            case MatchMode.PATTERN:
                pattern = contains_pattern(term)
                return any_of(*(field(f.property_name).like(pattern) for f in fields))
            case MatchMode.PRIMITIVE:
                assert self.primitive is not None
                argument = primitive_argument(self.primitive, term)
                return any_of(
                    *(field(f.property_name).primitive(self.primitive, argument) for f in fields)
                )
        return any_of(
            *(
                field(f.property_name).matches(f.behavior, term, case_sensitive=f.case_sensitive)
                for f in fields
            )
        )


class FullTextStrategyDispatcher:
    """Resolve strategies against provider capabilities, once per strategy."""

    def __init__(self, capabilities: ProviderCapabilities | None = None) -> None:
        self._capabilities = capabilities
        self._plans: dict[FullTextStrategy, FullTextPlan] = {}

    @property
    def capabilities(self) -> ProviderCapabilities:
        if self._capabilities is None:
            self._capabilities = probe_capabilities()
        return self._capabilities

    def resolve(self, strategy: FullTextStrategy) -> FullTextPlan:
        plan = self._plans.get(strategy)
        if plan is None:
            plan = self._plans.setdefault(strategy, self._plan(strategy))
        return plan

    def _plan(self, strategy: FullTextStrategy) -> FullTextPlan:
        if strategy is FullTextStrategy.CONTAINS:
            return FullTextPlan(strategy, MatchMode.FIELD_BEHAVIOR)
        if strategy is FullTextStrategy.LIKE:
            return FullTextPlan(strategy, MatchMode.PATTERN)
        if strategy is FullTextStrategy.CLIENT_SIDE:
            return FullTextPlan(strategy, MatchMode.CLIENT_SIDE)
        primitive = _REQUIRED_PRIMITIVE[strategy]
        if self.capabilities.supports(primitive):
            return FullTextPlan(strategy, MatchMode.PRIMITIVE, primitive=primitive)
        logger.info(
            "fulltext_strategy_fallback",
            strategy=strategy.value,
            missing=primitive.value,
            provider=self.capabilities.name,
        )
        return FullTextPlan(strategy, MatchMode.PATTERN, fell_back=True)


__all__ = ["FullTextPlan", "FullTextStrategyDispatcher", "MatchMode", "primitive_argument"]
