"""Generation errors – failures while compiling or emitting artifacts."""

from __future__ import annotations

from typing import Any

from facet_search.errors.base import FacetSearchError


class GenerationError(FacetSearchError):
    """Generation of one entity's artifacts failed."""

    default_code = "generation_error"

    def __init__(self, entity: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Generation failed for '{entity}'", entity=entity, **kwargs)


class EmissionError(GenerationError):
    """Rendering an artifact to source failed."""

    default_code = "emission_error"

    def __init__(self, entity: str, artifact: str, **kwargs: Any) -> None:
        super().__init__(entity, f"Could not emit {artifact} for '{entity}'", **kwargs)
        self.artifact = artifact

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["artifact"] = self.artifact
        return base


__all__ = ["EmissionError", "GenerationError"]
