"""
Factory functions for shared services.

Provides process-scoped singleton providers for settings and the i18n facade.
"""

from functools import lru_cache

from localekit.configuration import Settings
from localekit.i18n.service import I18nService


@lru_cache
def get_settings() -> Settings:
    """
    Get process-scoped settings singleton.

    This is the single source of truth for settings across the library.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_i18n_service() -> I18nService:
    """
    Get process-scoped I18nService singleton.

    The service owns the custom date format registry and the catalog cache,
    so every caller shares the same registrations and loaded catalogs.

    Returns:
        I18nService: Cached service configured from settings.i18n.

    Usage:
        i18n = get_i18n_service()
        i18n.set_language("fr_CA")
        label = i18n.tr("Remove")
    """
    settings = get_settings()
    return I18nService(settings=settings.i18n)


def reset_i18n_service() -> None:
    """Drop the cached settings and service.

    Primarily used for testing; the next call builds fresh instances.
    """
    get_i18n_service.cache_clear()
    get_settings.cache_clear()
