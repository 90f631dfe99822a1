"""
Shared service providers.

Provides the singleton accessors used by the module-level API.
"""

from localekit.services.providers import (
    get_settings,
    get_i18n_service,
    reset_i18n_service,
)

__all__ = [
    "get_settings",
    "get_i18n_service",
    "reset_i18n_service",
]
