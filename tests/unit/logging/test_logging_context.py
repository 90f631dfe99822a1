"""Unit tests for localekit.logging.context module.

Tests cover:
- bind_locale_context() context manager
- get_bound_locale()
- clear_locale_context()
"""

import pytest
import structlog

from localekit.logging import (
    bind_locale_context,
    clear_locale_context,
    get_bound_locale,
)


@pytest.mark.unit
class TestBindLocaleContext:
    """Test suite for bind_locale_context context manager."""

    def test_binds_locale(self):
        """The locale is bound inside the block."""
        with bind_locale_context("fr_CA"):
            assert get_bound_locale() == "fr_CA"

    def test_unbinds_after_block(self):
        """Bound keys are removed on exit."""
        with bind_locale_context("fr_CA", correlation_id="req-1"):
            pass

        ctx = structlog.contextvars.get_contextvars()
        assert "locale" not in ctx
        assert "correlation_id" not in ctx

    def test_unbinds_on_error(self):
        """Bound keys are removed when the block raises."""
        with pytest.raises(RuntimeError):
            with bind_locale_context("de"):
                raise RuntimeError("boom")

        assert get_bound_locale() is None

    def test_nested_blocks_restore_outer_values(self):
        """Leaving an inner block restores the outer locale and keys."""
        with bind_locale_context("fr_FR", correlation_id="outer"):
            with bind_locale_context("de_DE", correlation_id="inner"):
                assert get_bound_locale() == "de_DE"
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["locale"] == "fr_FR"
            assert ctx["correlation_id"] == "outer"

        assert get_bound_locale() is None

    def test_restores_value_bound_outside(self):
        """A locale bound before the block comes back afterwards."""
        structlog.contextvars.bind_contextvars(locale="en_US")

        with bind_locale_context("ja_JP"):
            assert get_bound_locale() == "ja_JP"

        assert get_bound_locale() == "en_US"

    def test_binds_extra_context(self):
        """Extra keyword arguments are bound."""
        with bind_locale_context("ja", correlation_id="req-2", tenant="acme"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["correlation_id"] == "req-2"
            assert ctx["tenant"] == "acme"

    def test_without_locale(self):
        """Omitting the locale binds nothing for it."""
        with bind_locale_context(correlation_id="req-3"):
            assert get_bound_locale() is None


@pytest.mark.unit
def test_clear_locale_context():
    """clear_locale_context() drops everything bound."""
    structlog.contextvars.bind_contextvars(locale="fr", other="x")

    clear_locale_context()

    assert structlog.contextvars.get_contextvars() == {}
