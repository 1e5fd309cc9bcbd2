"""Config – Settings base class and generator settings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from facet_search.errors import InvalidSettingValueError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class GeneratorSettings(Settings):
    """Options for a generation run.

    ``fail_fast`` re-raises the first unit failure instead of recording a
    diagnostic and moving on to the next entity. ``validate_dependencies``
    rejects dangling or cyclic ``depends_on`` references at spec-build time.
    """

    _prefix: ClassVar[str] = "FACET_SEARCH"

    output_dir: str = "generated"
    fail_fast: bool = False
    validate_dependencies: bool = True
    emit_sources: bool = True
    log_level: str = "INFO"
    json_logs: bool = False

    def _validate(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"must be one of {sorted(_LOG_LEVELS)}"
            )
        if not self.output_dir:
            raise InvalidSettingValueError("output_dir", self.output_dir, "must not be empty")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["GeneratorSettings", "Settings"]
