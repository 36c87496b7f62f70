"""pkglang configuration settings - main aggregator."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pkglang.configuration.base import LocalizationBaseSettings


class LocalizationSettings(LocalizationBaseSettings):
    """Culture selection and catalog discovery configuration.

    Environment Variables:
        LOCALIZATION_FALLBACK_CULTURE: Culture used when no preference is set
            or the preferred culture is invalid (default: en-US)
        LOCALIZATION_PREFERRED_CULTURE: Initial preferred culture (optional)
        LOCALIZATION_CATALOG_EXTENSION: Catalog file extension (default: .mo)
        LOCALIZATION_LANGUAGES_DIRECTORY: Directory holding a package's
            catalogs below each base directory (default: Languages)
        LOCALIZATION_ELLIPSIS: Marker appended by opens_window (default: …)

    Example:
        ```python
        from pkglang.services import get_settings

        settings = get_settings()
        extension = settings.localization.catalog_extension
        ```
    """

    fallback_culture: str = Field(
        default="en-US",
        alias="LOCALIZATION_FALLBACK_CULTURE",
        description="Culture used when no valid preference is available",
    )
    preferred_culture: Optional[str] = Field(
        default=None,
        alias="LOCALIZATION_PREFERRED_CULTURE",
        description="Initial preferred culture",
    )
    catalog_extension: str = Field(
        default=".mo",
        alias="LOCALIZATION_CATALOG_EXTENSION",
        description="File extension of compiled catalogs",
    )
    languages_directory: str = Field(
        default="Languages",
        alias="LOCALIZATION_LANGUAGES_DIRECTORY",
        description="Per-package directory name holding catalogs",
    )
    ellipsis: str = Field(
        default="…",
        alias="LOCALIZATION_ELLIPSIS",
        description="Marker for actions that open another window",
    )


class Settings(BaseSettings):
    """pkglang configuration settings - main aggregator.

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment name (default: development)

    Example:
        ```python
        from pkglang.configuration import settings

        if settings.is_production:
            ...
        fallback = settings.localization.fallback_culture
        ```
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    localization: LocalizationSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "localization": LocalizationSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
