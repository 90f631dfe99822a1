"""Custom date format registry.

Maps (format id, locale) to a registered DateFormat and keeps, per locale,
the ordered list of formats accepted when parsing user input.

Writes take a lock and publish fully built values; reads are plain dict
lookups and never block. Every format handed out is a fresh copy.
"""

import threading
from typing import Dict, List, Tuple, Union

from localekit.i18n.formats import DateFormat
from localekit.i18n.models import (
    DEFAULT_DATE_FORMAT_ID,
    LONG,
    MEDIUM,
    RESERVED_FORMAT_ID_THRESHOLD,
    SHORT,
    FormatKey,
    InvalidFormatIdError,
    LocaleTag,
    language_only,
    normalize_locale,
)
from localekit.logging import get_module_logger

logger = get_module_logger()

LocaleLike = Union[str, LocaleTag]

_BUILTIN_DATE_STYLES = (SHORT, MEDIUM, LONG)


class CustomFormatRegistry:
    """Thread-safe registry for per-locale custom date formats.

    Attributes:
        _formats: FormatKey to the stored (private) DateFormat.
        _input_formats: Locale string to an immutable tuple of DateFormats
            accepted for input parsing.
        _lock: Serializes writers.
    """

    def __init__(self):
        """Initialize the registry with empty maps and a writer lock."""
        self._formats: Dict[FormatKey, DateFormat] = {}
        self._input_formats: Dict[str, Tuple[DateFormat, ...]] = {}
        self._lock = threading.Lock()

    def register_format(
        self,
        format_id: int,
        locale: LocaleLike,
        fmt: DateFormat,
        accepted_for_input: bool = False,
    ) -> None:
        """Register a custom date format for a locale.

        Re-registering an existing key replaces the stored format.

        Args:
            format_id: Custom format id; must exceed the reserved threshold.
            locale: Locale the format applies to ("en_AU" or just "en").
            fmt: Format to store. A private copy is kept.
            accepted_for_input: Also accept this format when parsing input
                in ``locale``.

        Raises:
            InvalidFormatIdError: If ``format_id`` is reserved.
        """
        if format_id <= RESERVED_FORMAT_ID_THRESHOLD:
            logger.error("invalid_custom_format_id", format_id=format_id)
            raise InvalidFormatIdError(format_id)

        key = FormatKey.of(format_id, locale)
        stored = fmt.copy()

        with self._lock:
            replaced = key in self._formats
            self._formats[key] = stored
            if accepted_for_input:
                current = self._input_formats.get(key.locale, ())
                self._input_formats[key.locale] = current + (fmt.copy(),)

        logger.debug(
            "custom_date_format_registered",
            format_id=format_id,
            locale=key.locale,
            pattern=stored.pattern,
            accepted_for_input=accepted_for_input,
            replaced=replaced,
        )

    def unregister_format(self, format_id: int, locale: LocaleLike) -> None:
        """Remove the registration for exactly (format_id, locale).

        Input format lists and language-only registrations are left alone.
        Removing a key that is not registered does nothing.
        """
        key = FormatKey.of(format_id, locale)
        with self._lock:
            removed = self._formats.pop(key, None)

        if removed is not None:
            logger.debug(
                "custom_date_format_unregistered",
                format_id=format_id,
                locale=key.locale,
            )

    def resolve_format(
        self,
        format_id: int,
        locale: LocaleLike,
        alternate: int = SHORT,
    ) -> DateFormat:
        """Resolve a format id for a locale, never failing.

        Resolution order:
        1. Built-in style ids (SHORT, MEDIUM, LONG) give the locale's
           standard pattern. FULL is not one of them and follows step 5.
        2. The exact (format_id, locale) registration.
        3. The (format_id, language-only locale) registration.
        4. DEFAULT_DATE_FORMAT_ID gives the locale's SHORT format.
        5. Otherwise resolve ``alternate`` with SHORT as its alternate.

        Args:
            format_id: Requested format id.
            locale: Locale to resolve for.
            alternate: Id to try when ``format_id`` has no registration.

        Returns:
            A new DateFormat the caller may modify freely.
        """
        locale_str = normalize_locale(str(locale))

        if format_id in _BUILTIN_DATE_STYLES:
            return DateFormat.for_style(format_id, locale_str)

        key = FormatKey(format_id, locale_str)
        found = self._formats.get(key)
        if found is None:
            fallback_key = key.without_region()
            if fallback_key is not key:
                found = self._formats.get(fallback_key)
        if found is not None:
            return found.copy()

        if format_id == DEFAULT_DATE_FORMAT_ID:
            return DateFormat.for_style(SHORT, locale_str)

        return self.resolve_format(alternate, locale_str, SHORT)

    def get_input_formats(self, locale: LocaleLike) -> List[DateFormat]:
        """Formats to try, in order, when parsing a date typed in ``locale``.

        The locale's SHORT, MEDIUM and LONG formats and the ISO
        ``yyyy-MM-dd`` format always come first, followed by the custom
        input formats registered for the exact locale, or failing that for
        its language.

        Returns:
            A new list of new DateFormat objects.
        """
        locale_str = normalize_locale(str(locale))
        formats = [DateFormat.for_style(style, locale_str) for style in _BUILTIN_DATE_STYLES]
        formats.append(DateFormat.iso(locale_str))

        custom = self._input_formats.get(locale_str)
        if not custom and "_" in locale_str:
            custom = self._input_formats.get(language_only(locale_str))
        for fmt in custom or ():
            formats.append(fmt.copy())
        return formats

    def get_custom_input_formats(self, locale: LocaleLike) -> List[DateFormat]:
        """Only the custom input formats for ``locale`` (exact, then language)."""
        return self.get_input_formats(locale)[len(_BUILTIN_DATE_STYLES) + 1 :]

    def is_registered(self, format_id: int, locale: LocaleLike) -> bool:
        return FormatKey.of(format_id, locale) in self._formats

    def clear(self) -> None:
        """Clear all registrations.

        Primarily used for testing.
        """
        with self._lock:
            self._formats = {}
            self._input_formats = {}
        logger.debug("custom_format_registry_cleared")

    def count(self) -> int:
        """Get the number of registered formats."""
        return len(self._formats)
