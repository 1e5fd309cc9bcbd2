"""Providers – candidate sets that compiled predicates run against."""
from __future__ import annotations

from facet_search.providers.base import Candidates, order_groups
from facet_search.providers.memory import InMemoryCandidates
from facet_search.providers.sqlalchemy import SqlAlchemyCandidates, to_sql

__all__ = ["Candidates", "InMemoryCandidates", "SqlAlchemyCandidates", "order_groups", "to_sql"]
