"""Config – env-based generator configuration."""
from facet_search.config.base import GeneratorSettings, Settings
from facet_search.config.factory import SettingsFactory, load_settings
from facet_search.config.loaders import EnvSettingsLoader, SettingsLoader

__all__ = [
    "EnvSettingsLoader",
    "GeneratorSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
