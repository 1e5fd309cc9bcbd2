"""Testing – property-based strategies for facet-search specs."""
from __future__ import annotations

from facet_search.testing.strategies import (
    categorical_items_strategy,
    entity_spec_strategy,
    facet_spec_strategy,
    full_text_field_strategy,
    property_name_strategy,
)

__all__ = [
    "categorical_items_strategy",
    "entity_spec_strategy",
    "facet_spec_strategy",
    "full_text_field_strategy",
    "property_name_strategy",
]
