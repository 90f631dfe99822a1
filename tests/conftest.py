"""Shared fixtures for localekit tests."""

import pytest
import structlog

from localekit.i18n import (
    CustomFormatRegistry,
    DictCatalogLoader,
    I18nService,
    ModuleCatalogLoader,
    TranslationCatalogCache,
)
from localekit.services import reset_i18n_service
from tests.factories.i18n import CountingLoader, make_catalog, make_i18n_settings


@pytest.fixture
def registry():
    """Empty custom format registry."""
    return CustomFormatRegistry()


@pytest.fixture
def counting_loader():
    """Loader with an "fr" catalog only, counting every load."""
    return CountingLoader({"fr": make_catalog("fr")})


@pytest.fixture
def catalog_cache(counting_loader):
    """Catalog cache over the counting loader."""
    return TranslationCatalogCache(counting_loader)


@pytest.fixture
def module_loader():
    """Loader over the fixture_msgs catalog package."""
    return ModuleCatalogLoader("fixture_msgs")


@pytest.fixture
def i18n_settings():
    """I18nSettings pointing at the fixture catalogs."""
    return make_i18n_settings()


@pytest.fixture
def i18n_service(i18n_settings):
    """I18nService over the fixture catalogs with a per-context provider."""
    return I18nService(settings=i18n_settings)


@pytest.fixture
def global_i18n_service():
    """I18nService using the process-wide provider."""
    return I18nService(settings=make_i18n_settings(provider="global"))


@pytest.fixture
def memory_i18n_service(i18n_settings):
    """I18nService over an in-memory catalog set."""
    loader = DictCatalogLoader(
        {
            "de": {"messages": {"Remove": "Entfernen"}},
            "ja": {"messages": {"Remove": "削除"}},
        }
    )
    return I18nService(settings=i18n_settings, loader=loader)


@pytest.fixture(autouse=True)
def _reset_shared_state(monkeypatch):
    """Point the shared service at the fixture catalogs and reset it."""
    monkeypatch.setenv("I18N_TRANSLATION_PACKAGE", "fixture_msgs")
    reset_i18n_service()
    structlog.contextvars.clear_contextvars()
    yield
    reset_i18n_service()
    structlog.contextvars.clear_contextvars()
