"""Configuration module - public API.

Centralized configuration using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)
    LocalizationSettings: Localization settings section
"""

from pkglang.configuration.settings import LocalizationSettings, Settings, settings

__all__ = ["Settings", "LocalizationSettings", "settings"]
