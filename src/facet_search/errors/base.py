"""Errors – FacetSearchError, the root of the facet-search hierarchy.

Every error can name the annotated entity it concerns, so a batch run over
many entity types reports each failure against its type.
"""

from __future__ import annotations

import json
from typing import Any


class FacetSearchError(Exception):
    """Root of the facet-search error hierarchy.

    Args:
        message: Human-readable description.
        entity: Name of the annotated entity type involved, if any.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra JSON-friendly context.
        cause: Original exception that triggered this error.
    """

    default_code: str = "facet_search_error"

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured log events and diagnostics.

        ``error`` is the class name; ``entity`` appears only when known.
        """
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.entity is not None:
            payload["entity"] = self.entity
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["FacetSearchError"]
