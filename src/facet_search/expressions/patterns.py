"""Expressions – SQL ``LIKE`` pattern helpers.

Patterns use ``%`` (any run), ``_`` (any single character) and ``\\`` as the
escape character, the form SQLAlchemy is given via ``like(..., escape="\\")``.
"""
from __future__ import annotations

import functools
import re

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape ``\\``, ``%`` and ``_`` so *term* matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(term: str) -> str:
    return f"%{escape_like(term)}%"


@functools.lru_cache(maxsize=256)
def like_to_regex(pattern: str, case_sensitive: bool = False) -> re.Pattern[str]:
    """Compile a ``LIKE`` pattern into an anchored regular expression."""
    parts: list[str] = []
    chars = iter(pattern)
    for char in chars:
        if char == LIKE_ESCAPE:
            parts.append(re.escape(next(chars, LIKE_ESCAPE)))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    return re.compile("".join(parts), flags)


__all__ = ["LIKE_ESCAPE", "contains_pattern", "escape_like", "like_to_regex"]
