"""Locale context binding for structured logging.

Binds the active locale (and any request metadata) to every log entry
made inside a block, so log lines written while serving a French request
can be told apart from those of an English one.

Usage:
    from localekit.logging import bind_locale_context

    with bind_locale_context("fr_FR", correlation_id="req-123"):
        logger.info("rendering_invoice")

Dependencies:
    - structlog.contextvars
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_locale_context(
    locale: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind locale-scoped context to all logs within the context manager.

    Args:
        locale: Locale string active in the block (e.g., "fr_FR").
        correlation_id: Optional request identifier.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars and the
        previous values are restored on exit.
    """
    context: dict[str, Any] = {}

    if locale is not None:
        context["locale"] = str(locale)

    if correlation_id is not None:
        context["correlation_id"] = correlation_id

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_bound_locale() -> Optional[str]:
    """Get the locale currently bound to the logging context.

    Returns:
        The locale string if bound, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("locale")


def clear_locale_context() -> None:
    """Clear all context bound to the logging context vars."""
    structlog.contextvars.clear_contextvars()
