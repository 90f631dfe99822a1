"""Structlog configuration for localekit.

localekit is a library, so it never takes over the root logger. Every
module logs through a standard-library logger named after it, under the
``localekit`` parent logger. The level and handler on that parent decide
what gets emitted. The host application may configure it or leave it
alone.

Usage:
    from localekit.logging import configure_logging, get_module_logger

    # Optional, at application startup
    configure_logging(log_level="DEBUG")

    # In a library module
    logger = get_module_logger()
    logger.info("catalog_loaded", locale="fr_CA")

Dependencies:
    - localekit.configuration.Settings
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from localekit.configuration import Settings

LIBRARY_LOGGER_NAME = "localekit"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def _shared_processors() -> List[Processor]:
    """Processors run for every event before it reaches the stdlib logger."""
    return [
        structlog.stdlib.filter_by_level,
        # Active locale, correlation ids, ...
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _library_handler(renderer: Processor) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ]
        )
    )
    return handler


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    attach_handler: bool = True,
) -> BoundLogger:
    """Configure structlog and the ``localekit`` logger.

    Args:
        log_level: Level for the ``localekit`` logger. Defaults to
            Settings.LOG_LEVEL.
        is_production: JSON output when True, console output otherwise.
            Defaults to Settings.is_production.
        attach_handler: Add a stream handler to the ``localekit`` logger
            unless it already has one. Pass False when the host application
            routes records itself.

    Returns:
        Logger bound to the ``localekit`` logger.
    """
    structlog.configure(
        processors=_shared_processors(),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)

    # Nothing from the library is emitted under pytest.
    if _is_test_environment():
        library_logger.setLevel(logging.CRITICAL + 1)
        return structlog.stdlib.get_logger(LIBRARY_LOGGER_NAME)

    settings = None
    if log_level is None or is_production is None:
        settings = Settings()

    prod_mode = is_production if is_production is not None else settings.is_production
    level_name = log_level or settings.LOG_LEVEL

    if attach_handler and not library_logger.handlers:
        renderer = (
            structlog.processors.JSONRenderer()
            if prod_mode
            else structlog.dev.ConsoleRenderer()
        )
        library_logger.addHandler(_library_handler(renderer))
        library_logger.propagate = False
    library_logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    return structlog.stdlib.get_logger(LIBRARY_LOGGER_NAME)


# Configured on import so module loggers work before any explicit setup.
configure_logging()


def _caller_module_name(depth: int) -> str:
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            return "unknown"
        frame = frame.f_back
    module = inspect.getmodule(frame) if frame is not None else None
    return module.__name__ if module else "unknown"


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger backed by the stdlib logger ``name``.

    Args:
        name: Logger name; defaults to the calling module's name.
    """
    return structlog.stdlib.get_logger(name or _caller_module_name(1))


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with component context.

    The stdlib logger is named after the module, so ``localekit.*`` modules
    inherit the level and handler of the ``localekit`` logger.

    Example:
        # In localekit/i18n/cache.py
        logger = get_module_logger()
        # context: {"component": "cache", "module_path": "localekit.i18n.cache"}
    """
    module_name = _caller_module_name(1)
    return structlog.stdlib.get_logger(module_name).bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )
