"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Locale and catalog settings class

Example:
    ```python
    from localekit.services import get_settings

    settings = get_settings()
    provider = settings.i18n.provider
    ```
"""

from localekit.configuration.i18n import I18nSettings
from localekit.configuration.settings import Settings

__all__ = ["Settings", "I18nSettings"]
