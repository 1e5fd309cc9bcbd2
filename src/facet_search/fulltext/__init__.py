"""Full text – strategy dispatch and provider capabilities."""
from __future__ import annotations

from facet_search.fulltext.capabilities import ProviderCapabilities, probe_capabilities
from facet_search.fulltext.dispatcher import (
    FullTextPlan,
    FullTextStrategyDispatcher,
    MatchMode,
    primitive_argument,
)

__all__ = [
    "FullTextPlan",
    "FullTextStrategyDispatcher",
    "MatchMode",
    "ProviderCapabilities",
    "primitive_argument",
    "probe_capabilities",
]
