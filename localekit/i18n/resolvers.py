"""Locale resolution from request metadata.

Turns an HTTP Accept-Language header (or an explicit preference list) into
the LocaleTag to install for a request.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from localekit.i18n.models import LocaleTag, normalize_locale
from localekit.logging import get_module_logger

logger = get_module_logger()


def parse_accept_language(header: Optional[str]) -> List[Tuple[str, float]]:
    """Parse an Accept-Language header into (locale, quality) pairs.

    "en-US,en;q=0.9,fr-FR;q=0.8" -> [("en_US", 1.0), ("en", 0.9), ("fr_FR", 0.8)]

    Wildcards and malformed entries are skipped. The result is sorted by
    quality, highest first; equal qualities keep header order.
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        lang_range, _, params = part.partition(";")
        lang_range = lang_range.strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 1.0

        if quality <= 0:
            continue
        preferences.append((normalize_locale(lang_range), quality))

    return sorted(preferences, key=lambda x: x[1], reverse=True)


class LanguageNegotiator:
    """Matches requested locales against available ones.

    A request for "pt_BR" can be served by "pt" (or by "pt_PT") when no
    exact match exists.
    """

    @staticmethod
    def matches_language(requested: str, available: str, strict: bool = False) -> bool:
        """Check if ``available`` can serve ``requested``.

        Args:
            requested: Requested locale (e.g., "en_US").
            available: Available locale (e.g., "en").
            strict: If True, require an exact match.
        """
        requested = normalize_locale(requested)
        available = normalize_locale(available)
        if requested == available:
            return True

        if strict:
            return False

        return requested.split("_")[0] == available.split("_")[0]

    @staticmethod
    def find_best_match(
        requested: Iterable[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Return the first available locale matching the preference order.

        For each requested locale an exact match wins over a language-only
        match.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default


class LocaleResolver:
    """Resolves the locale for a request.

    Attributes:
        default_locale: Locale used when nothing matches.
        supported_locales: Locales the deployment serves; empty means any
            requested locale is accepted as-is.
    """

    def __init__(
        self,
        default_locale: Union[str, LocaleTag] = "en_US",
        supported_locales: Optional[Sequence[Union[str, LocaleTag]]] = None,
    ):
        self.default_locale = LocaleTag.parse(default_locale)
        self.supported_locales = [str(LocaleTag.parse(s)) for s in (supported_locales or [])]
        self.log = logger.bind(default_locale=str(self.default_locale))

    def resolve_from_header(self, accept_language: Optional[str]) -> LocaleTag:
        """Resolve a locale from an Accept-Language header.

        Args:
            accept_language: Header value.

        Returns:
            Best supported LocaleTag, or the default.
        """
        preferences = [locale for locale, _ in parse_accept_language(accept_language)]
        return self.resolve_from_preferences(preferences)

    def resolve_from_preferences(self, preferences: Sequence[str]) -> LocaleTag:
        """Resolve a locale from an ordered list of preferred locales."""
        if not preferences:
            return self.default_locale

        if not self.supported_locales:
            resolved = LocaleTag.parse(preferences[0])
        else:
            match = LanguageNegotiator.find_best_match(preferences, self.supported_locales)
            if match is None:
                self.log.debug("no_matching_locale", requested=list(preferences))
                return self.default_locale
            resolved = LocaleTag.parse(match)

        self.log.debug("resolved_locale", locale=str(resolved))
        return resolved
