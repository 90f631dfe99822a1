"""Translation catalogs.

A catalog maps source text (optionally qualified by a context string) to a
translation for one locale. Lookups that miss return the source text.
Catalogs are never modified once handed out by the catalog cache.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Mapping, Optional

from babel.support import NullTranslations

from localekit.i18n.formats import babel_locale

# Plural source text no catalog translates; marks a gettext miss.
_MISSING_PLURAL = "\x00"


def english_plural(singular: str, plural: str, n: int) -> str:
    """Source-language plural rule: singular only for exactly one."""
    return singular if n == 1 else plural


class TranslationCatalog(ABC):
    """Abstract base for translation catalogs.

    Implementations provide ``lookup``; the gettext-style accessors fall
    back to the source text on a miss.
    """

    locale: str = ""

    @abstractmethod
    def lookup(self, msgid: str, context: Optional[str] = None) -> Optional[str]:
        """Return the translation of ``msgid``, or None if there is none.

        Args:
            msgid: Source text.
            context: Optional disambiguation context.
        """

    @abstractmethod
    def lookup_plural(
        self, singular: str, n: int, context: Optional[str] = None
    ) -> Optional[str]:
        """Return the plural form of ``singular`` for ``n``, or None."""

    @property
    def is_empty(self) -> bool:
        return False

    def has_message(self, msgid: str, context: Optional[str] = None) -> bool:
        return self.lookup(msgid, context) is not None

    def gettext(self, msgid: str) -> str:
        translated = self.lookup(msgid)
        return msgid if translated is None else translated

    def pgettext(self, context: str, msgid: str) -> str:
        translated = self.lookup(msgid, context)
        return msgid if translated is None else translated

    def ngettext(self, singular: str, plural: str, n: int) -> str:
        translated = self.lookup_plural(singular, n)
        return english_plural(singular, plural, n) if translated is None else translated

    def npgettext(self, context: str, singular: str, plural: str, n: int) -> str:
        translated = self.lookup_plural(singular, n, context)
        return english_plural(singular, plural, n) if translated is None else translated


class _EmptyCatalog(TranslationCatalog):
    """Catalog with no translations; every lookup misses."""

    locale = ""

    def lookup(self, msgid, context=None):
        return None

    def lookup_plural(self, singular, n, context=None):
        return None

    @property
    def is_empty(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "EMPTY_CATALOG"


EMPTY_CATALOG: TranslationCatalog = _EmptyCatalog()


class DictCatalog(TranslationCatalog):
    """Catalog backed by plain dictionaries.

    Attributes:
        locale: Locale the translations are written for.
        messages: msgid to translation.
        contexts: context to {msgid: translation}.
        plurals: msgid (or ``(context, msgid)``) to {CLDR plural category:
            translation}, e.g. ``{"one": "{0} pomme", "other": "{0} pommes"}``.
    """

    def __init__(
        self,
        locale: str,
        messages: Optional[Mapping[str, str]] = None,
        contexts: Optional[Mapping[str, Mapping[str, str]]] = None,
        plurals: Optional[Mapping[Any, Mapping[str, str]]] = None,
    ):
        self.locale = locale
        self.messages = MappingProxyType(dict(messages or {}))
        self.contexts = MappingProxyType(
            {ctx: MappingProxyType(dict(entries)) for ctx, entries in (contexts or {}).items()}
        )
        self.plurals = MappingProxyType(
            {key: MappingProxyType(dict(forms)) for key, forms in (plurals or {}).items()}
        )
        self._plural_form = babel_locale(locale).plural_form

    def lookup(self, msgid: str, context: Optional[str] = None) -> Optional[str]:
        if context is None:
            return self.messages.get(msgid)
        return self.contexts.get(context, {}).get(msgid)

    def lookup_plural(
        self, singular: str, n: int, context: Optional[str] = None
    ) -> Optional[str]:
        forms = self.plurals.get(singular if context is None else (context, singular))
        if not forms:
            return None
        category = self._plural_form(abs(n))
        return forms.get(category, forms.get("other"))

    def __len__(self) -> int:
        return (
            len(self.messages)
            + sum(len(entries) for entries in self.contexts.values())
            + len(self.plurals)
        )

    def __repr__(self) -> str:
        return f"DictCatalog(locale={self.locale!r}, entries={len(self)})"


class GettextCatalog(TranslationCatalog):
    """Catalog backed by a compiled gettext ``.mo`` file via Babel.

    Attributes:
        locale: Locale the translations are written for.
        translations: Babel Translations object.
    """

    def __init__(self, locale: str, translations: NullTranslations):
        self.locale = locale
        self.translations = translations

    def lookup(self, msgid: str, context: Optional[str] = None) -> Optional[str]:
        if context is None:
            translated = self.translations.gettext(msgid)
        else:
            translated = self.translations.pgettext(context, msgid)
        # gettext hands back the msgid itself on a miss.
        if not translated or translated == msgid:
            return None
        return translated

    def lookup_plural(
        self, singular: str, n: int, context: Optional[str] = None
    ) -> Optional[str]:
        # A miss returns the plural source text for any n other than 1.
        if self._ngettext(singular, 2, context) == _MISSING_PLURAL:
            return None
        return self._ngettext(singular, n, context) or None

    def _ngettext(self, singular: str, n: int, context: Optional[str]) -> str:
        if context is None:
            return self.translations.ngettext(singular, _MISSING_PLURAL, n)
        return self.translations.npgettext(context, singular, _MISSING_PLURAL, n)

    def __repr__(self) -> str:
        return f"GettextCatalog(locale={self.locale!r})"
