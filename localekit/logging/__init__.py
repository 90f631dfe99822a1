"""Structured logging infrastructure.

Centralized logging configuration and utilities for localekit using structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_locale_context(): Context manager binding the active locale to logs
    - get_bound_locale(): Locale currently bound to the log context
    - clear_locale_context(): Clear all bound log context

Example:
    from localekit.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from localekit.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)
from localekit.logging.context import (
    bind_locale_context,
    clear_locale_context,
    get_bound_locale,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "bind_locale_context",
    "get_bound_locale",
    "clear_locale_context",
]
