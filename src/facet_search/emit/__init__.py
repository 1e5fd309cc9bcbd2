"""Emit – Python source rendering of compiled artifacts."""
from __future__ import annotations

from facet_search.emit.renderer import EmittedSource, SourceEmitter, module_names

__all__ = ["EmittedSource", "SourceEmitter", "module_names"]
