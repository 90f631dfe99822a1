"""Unit tests for localekit.logging.setup module.

Tests cover:
- Test environment detection
- configure_logging function and the localekit parent logger
- get_logger and get_module_logger
"""

import logging
from unittest.mock import patch

import pytest
import structlog

from localekit.logging.setup import (
    LIBRARY_LOGGER_NAME,
    _is_test_environment,
    configure_logging,
    get_logger,
    get_module_logger,
)


@pytest.fixture
def library_logger():
    """The localekit logger, restored after the test."""
    target = logging.getLogger(LIBRARY_LOGGER_NAME)
    handlers, level, propagate = list(target.handlers), target.level, target.propagate
    target.handlers = []
    yield target
    target.handlers = handlers
    target.setLevel(level)
    target.propagate = propagate
    configure_logging()


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_returns_logger(self):
        """configure_logging returns a usable logger."""
        result = configure_logging(log_level="DEBUG", is_production=False)

        assert result is not None
        assert hasattr(result, "info")
        assert hasattr(result, "debug")
        assert hasattr(result, "error")

    def test_suppresses_library_output_in_tests(self):
        """The localekit logger level is above CRITICAL during tests."""
        configure_logging()
        assert logging.getLogger(LIBRARY_LOGGER_NAME).level > logging.CRITICAL

    def test_leaves_root_logger_alone(self):
        """Configuring the library does not touch the root logger."""
        root_level = logging.root.level
        root_handlers = list(logging.root.handlers)

        configure_logging()

        assert logging.root.level == root_level
        assert logging.root.handlers == root_handlers

    def test_logging_does_not_raise(self):
        """Log calls work with suppressed output."""
        logger = configure_logging()
        logger.info("test_event", locale="fr_CA")
        logger.debug("test_event", count=1)

    def test_attaches_handler_outside_tests(self, library_logger):
        """Outside pytest a stream handler and the level are installed."""
        with patch("localekit.logging.setup._is_test_environment", return_value=False):
            configure_logging(log_level="warning", is_production=True)

        assert library_logger.level == logging.WARNING
        assert len(library_logger.handlers) == 1
        assert isinstance(library_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert library_logger.propagate is False

    def test_keeps_existing_handler(self, library_logger):
        """A handler set up by the host application is not duplicated."""
        existing = logging.NullHandler()
        library_logger.addHandler(existing)

        with patch("localekit.logging.setup._is_test_environment", return_value=False):
            configure_logging(log_level="DEBUG", is_production=False)

        assert library_logger.handlers == [existing]
        assert library_logger.level == logging.DEBUG

    def test_without_handler(self, library_logger):
        """attach_handler=False leaves routing to the host application."""
        with patch("localekit.logging.setup._is_test_environment", return_value=False):
            configure_logging(log_level="INFO", is_production=False, attach_handler=False)

        assert library_logger.handlers == []


@pytest.mark.unit
class TestGetLoggers:
    """Test suite for logger accessors."""

    def test_get_logger_with_name(self):
        """get_logger uses the given stdlib logger name."""
        logger = get_logger("localekit.tests")
        assert logger.bind().name == "localekit.tests"
        logger.info("named_logger_event")

    def test_get_logger_without_name(self):
        """get_logger names the logger after the calling module."""
        logger = get_logger()
        assert logger.bind().name == __name__

    def test_get_module_logger(self):
        """get_module_logger binds the calling module's path."""
        logger = get_module_logger()

        assert logger.name == __name__
        context = structlog.get_context(logger)
        assert context["module_path"] == __name__
        assert context["component"] == __name__.rsplit(".", 1)[-1]
        logger.info("module_logger_event")

    def test_library_module_loggers_inherit_library_level(self):
        """Module loggers sit under the localekit logger."""
        stdlib_logger = logging.getLogger("localekit.i18n.cache")
        assert stdlib_logger.getEffectiveLevel() > logging.CRITICAL
