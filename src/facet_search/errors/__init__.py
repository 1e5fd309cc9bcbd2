"""Error hierarchy – public re-export surface.

Hierarchy::

    FacetSearchError
    ├── DeclarationError          (declaration.py)
    │   └── InvalidDeclarationError
    ├── GenerationError           (generation.py)
    │   └── EmissionError
    └── ConfigError               (config.py)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from facet_search.errors.base import FacetSearchError
from facet_search.errors.config import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from facet_search.errors.declaration import DeclarationError, InvalidDeclarationError
from facet_search.errors.generation import EmissionError, GenerationError

__all__ = [
    "ConfigError",
    "DeclarationError",
    "EmissionError",
    "FacetSearchError",
    "GenerationError",
    "InvalidDeclarationError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
]
