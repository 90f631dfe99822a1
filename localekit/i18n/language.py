"""Resolved per-locale language settings.

A LanguageSetting bundles everything the facade needs for one locale: the
tag, the resolved catalog, the Babel locale, the local currency and a
message formatter. It is immutable; changing the current language builds a
new one.
"""

from dataclasses import dataclass, field
from typing import Optional

from babel import Locale as BabelLocale
from babel.core import get_global
from babel.numbers import get_currency_symbol, get_territory_currencies

from localekit.i18n.cache import TranslationCatalogCache
from localekit.i18n.catalog import TranslationCatalog
from localekit.i18n.formats import DateFormat, babel_locale
from localekit.i18n.messageformat import MessageFormatter
from localekit.i18n.models import MEDIUM, SHORT, LocaleTag

DEFAULT_CURRENCY = "USD"


def currency_for_locale(locale: BabelLocale, default: str = DEFAULT_CURRENCY) -> str:
    """Return the ISO 4217 currency in use in the locale's territory.

    A locale without a territory uses the territory its language is most
    likely spoken in ("fr" -> FR -> EUR).
    """
    territory = locale.territory
    if not territory:
        likely = get_global("likely_subtags").get(locale.language)
        if likely:
            territory = BabelLocale.parse(likely).territory
    if territory:
        currencies = get_territory_currencies(territory)
        if currencies:
            return currencies[0]
    return default


@dataclass(frozen=True)
class LanguageSetting:
    """Immutable bundle of the state tied to one locale.

    Attributes:
        locale: The locale this setting is for.
        catalog: Best available catalog (possibly EMPTY_CATALOG).
        babel_locale: Babel locale used for formatting.
        currency_code: ISO 4217 currency for the locale's territory.
        currency_symbol: Localized symbol of ``currency_code``.
        formatter: Message formatter for the locale.
    """

    locale: LocaleTag
    catalog: TranslationCatalog
    babel_locale: BabelLocale = field(repr=False)
    currency_code: str
    currency_symbol: str
    formatter: MessageFormatter = field(repr=False)

    @classmethod
    def create(
        cls,
        locale: LocaleTag,
        cache: TranslationCatalogCache,
        currency_code: Optional[str] = None,
    ) -> "LanguageSetting":
        """Build the setting for ``locale``, resolving its catalog.

        Args:
            locale: Locale to build for.
            cache: Catalog cache used to resolve the translation catalog.
            currency_code: Overrides the territory's currency.

        Returns:
            LanguageSetting instance.
        """
        b_locale = babel_locale(str(locale))
        code = currency_code or currency_for_locale(b_locale)
        return cls(
            locale=locale,
            catalog=cache.resolve(locale),
            babel_locale=b_locale,
            currency_code=code,
            currency_symbol=get_currency_symbol(code, locale=b_locale),
            formatter=MessageFormatter(str(locale), currency_code=code),
        )

    @property
    def language(self) -> str:
        return self.locale.language

    def short_time_format(self) -> DateFormat:
        return DateFormat.for_time_style(SHORT, str(self.locale))

    def long_time_format(self) -> DateFormat:
        """Time with seconds (the locale's MEDIUM time style)."""
        return DateFormat.for_time_style(MEDIUM, str(self.locale))

    def military_time_format(self, with_seconds: bool) -> DateFormat:
        return DateFormat("H:m:s" if with_seconds else "H:m", str(self.locale))
