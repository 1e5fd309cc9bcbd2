"""Declaration errors – malformed or inconsistent search declarations."""

from __future__ import annotations

from typing import Any

from facet_search.errors.base import FacetSearchError


class DeclarationError(FacetSearchError):
    """A domain-type declaration cannot be turned into a search spec."""

    default_code = "declaration_error"


class InvalidDeclarationError(DeclarationError):
    """An annotation option or member is invalid.

    ``entity`` and ``member`` locate the offending declaration; ``member`` is
    ``None`` for type-level problems.
    """

    default_code = "invalid_declaration"

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        member: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, entity=entity, **kwargs)
        self.member = member

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["entity"] = self.entity
        base["member"] = self.member
        return base


__all__ = ["DeclarationError", "InvalidDeclarationError"]
