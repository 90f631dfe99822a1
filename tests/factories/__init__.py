"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    CountingLoader,
    make_catalog,
    make_date_format,
    make_i18n_settings,
    make_language_setting,
)

__all__ = [
    "CountingLoader",
    "make_catalog",
    "make_date_format",
    "make_i18n_settings",
    "make_language_setting",
]
