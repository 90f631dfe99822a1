"""I18n service - the facade over locale state, catalogs and formats.

Composes the custom format registry, the catalog cache and the active
current-language provider, and exposes the translation and formatting
helpers application code calls.

Usage:
    from localekit.services import get_i18n_service

    i18n = get_i18n_service()
    i18n.set_language("fr_CA")
    i18n.tr("Remove")                       # "Éliminer" via the fr catalog
    i18n.trf("{0} files", 3)
    i18n.formatter.date_to_string(date.today())
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional, Sequence, Union

from localekit.configuration import I18nSettings
from localekit.i18n.cache import TranslationCatalogCache
from localekit.i18n.formats import DateFormat
from localekit.i18n.formatting import DateOptions, LocaleFormatter
from localekit.i18n.language import LanguageSetting
from localekit.i18n.loader import CatalogLoader, create_loader
from localekit.i18n.models import DEFAULT_DATE_FORMAT_ID, SHORT, LocaleTag
from localekit.i18n.providers import (
    ContextLanguageSettingsProvider,
    GlobalLanguageSettingsProvider,
    LanguageSettingsProvider,
)
from localekit.i18n.registry import CustomFormatRegistry
from localekit.i18n.text import (
    EscapeFunction,
    escape_javascript,
    get_escape_function,
    wikified,
)
from localekit.logging import bind_locale_context, get_module_logger

logger = get_module_logger()

LocaleLike = Union[str, LocaleTag]


class I18nService:
    """Class-based facade for localization.

    Attributes:
        settings: I18nSettings in effect.
        registry: Custom date format registry.
        cache: Translation catalog cache.
        date_options: Null-date test and default date.
    """

    def __init__(
        self,
        settings: Optional[I18nSettings] = None,
        loader: Optional[CatalogLoader] = None,
        registry: Optional[CustomFormatRegistry] = None,
        cache: Optional[TranslationCatalogCache] = None,
        provider: Optional[LanguageSettingsProvider] = None,
    ):
        """Initialize the service.

        Args:
            settings: Optional settings; read from the environment if omitted.
            loader: Catalog loader; built from ``settings`` if omitted.
            registry: Format registry; a new one if omitted.
            cache: Catalog cache; wraps ``loader`` if omitted.
            provider: Current-language provider; chosen by
                ``settings.provider`` if omitted.
        """
        self.settings = settings or I18nSettings()
        self.registry = registry or CustomFormatRegistry()
        if cache is None:
            cache = TranslationCatalogCache(
                loader
                or create_loader(
                    self.settings.catalog_backend,
                    self.settings.translation_package,
                    self.settings.catalog_dir,
                    self.settings.gettext_domain,
                )
            )
        self.cache = cache
        self.date_options = DateOptions()
        self._escape: EscapeFunction = get_escape_function(self.settings.escape)
        self._provider = provider or self._create_provider(self.settings.provider)

        logger.info(
            "i18n_service_initialized",
            provider=type(self._provider).__name__,
            namespace=self.cache.loader.namespace,
            default_locale=self.settings.default_locale,
        )

    def create_setting(self, locale: LocaleTag) -> LanguageSetting:
        """Build the LanguageSetting for ``locale`` (resolving its catalog)."""
        return LanguageSetting.create(locale, self.cache)

    def _create_provider(self, kind: str) -> LanguageSettingsProvider:
        default_locale = self.to_locale(self.settings.default_locale)
        if kind == "global":
            return GlobalLanguageSettingsProvider(self.create_setting, default_locale)
        return ContextLanguageSettingsProvider(self.create_setting, default_locale)

    # Locale state

    def to_locale(self, value: Optional[LocaleLike]) -> LocaleTag:
        """Turn user input into a LocaleTag.

        A bare language gets the configured default country, so "en"
        becomes "en_US". LocaleTag instances are used as they are.
        """
        if isinstance(value, LocaleTag):
            return value
        tag = LocaleTag.parse(value, default=self.settings.default_locale)
        if not tag.region:
            tag = LocaleTag(tag.language, self.settings.default_country)
        return tag

    def set_language(self, locale: Optional[LocaleLike]) -> None:
        """Set the current language for the caller's context.

        Args:
            locale: LocaleTag, or a string like "fr", "fr_CA" or "fr-CA".
                Unknown locales resolve to the empty catalog.
        """
        self._provider.set_locale(self.to_locale(locale))

    def get_current_language(self) -> LanguageSetting:
        return self._provider.vend()

    def get_default_language(self) -> LanguageSetting:
        return self._provider.default_setting

    def get_language(self) -> str:
        """Language code of the current setting (e.g., "fr")."""
        return self.get_current_language().language

    @property
    def language_settings_provider(self) -> LanguageSettingsProvider:
        return self._provider

    def set_language_settings_provider(self, provider: LanguageSettingsProvider) -> None:
        """Swap the current-language strategy for the whole process.

        Settings already vended by the previous provider are unaffected.
        """
        self._provider = provider
        logger.info("language_settings_provider_changed", provider=type(provider).__name__)

    @contextmanager
    def locale_context(self, locale: LocaleLike) -> Generator[LanguageSetting, None, None]:
        """Use ``locale`` for a block and bind it into the log context.

        Example:
            with i18n.locale_context("fr_CA"):
                send_invoice(...)
        """
        with self._provider.use_locale(self.to_locale(locale)) as setting:
            with bind_locale_context(str(setting.locale)):
                yield setting

    def supports(self, lang: Optional[LocaleLike], country: Optional[str] = None) -> bool:
        """Check if a catalog exists for a locale or its language.

        Args:
            lang: Language code, "ll_RR" string, or LocaleTag.
            country: Optional country when ``lang`` is a bare language.
        """
        if isinstance(lang, LocaleTag):
            tag = lang
        else:
            if not lang:
                return False
            tag = LocaleTag.parse(f"{lang}_{country}" if country else lang)
        return not self.cache.resolve(tag).is_empty

    # Date formats

    def register_custom_date_format(
        self,
        format_id: int,
        lang: str,
        country: Optional[str],
        pattern: str,
        acceptable_for_input: bool = False,
    ) -> None:
        """Register an LDML date pattern under a custom format id.

        Args:
            format_id: Custom id (above the reserved built-in ids).
            lang: Language code.
            country: Country code, or None/"" to apply to every country of
                ``lang``.
            pattern: LDML pattern, e.g. "dd/MM/yyyy".
            acceptable_for_input: Also accept the pattern when parsing.

        Raises:
            InvalidFormatIdError: If ``format_id`` is reserved.
        """
        locale = LocaleTag(lang, country or "")
        fmt = DateFormat(pattern, str(locale))
        self.registry.register_format(format_id, locale, fmt, acceptable_for_input)

    def set_default_date_format(self, lang: str, country: Optional[str], pattern: str) -> None:
        """Register the deployment's default date format for a locale."""
        self.register_custom_date_format(DEFAULT_DATE_FORMAT_ID, lang, country, pattern, True)

    def resolve_date_format(self, format_id: int, alternate: int = SHORT) -> DateFormat:
        """Resolve a format id for the current locale. Never fails."""
        locale = self.get_current_language().locale
        return self.registry.resolve_format(format_id, locale, alternate)

    @property
    def formatter(self) -> LocaleFormatter:
        """Formatter bound to the current language."""
        return LocaleFormatter(self.get_current_language(), self.registry, self.date_options)

    def set_null_date_test(self, test: Callable[[Any], bool]) -> None:
        """Set the predicate deciding which dates format as "".

        Raises:
            ValueError: If ``test`` is None.
        """
        if test is None:
            raise ValueError("Date testing function cannot be None")
        self.date_options.null_date_test = test

    def get_null_date_test(self) -> Callable[[Any], bool]:
        return self.date_options.null_date_test

    def is_null_date(self, value: Any) -> bool:
        return self.date_options.is_null_date(value)

    def set_default_date(self, value: Any) -> None:
        self.date_options.default_date = value

    def get_default_date(self) -> Any:
        return self.date_options.default_date

    # Escaping

    @property
    def escape_function(self) -> EscapeFunction:
        return self._escape

    def set_escape_function(self, escape: Union[str, EscapeFunction]) -> None:
        """Set the escape applied by the tr* functions ('none', 'html' or a
        callable)."""
        self._escape = get_escape_function(escape) if isinstance(escape, str) else escape

    # Translation

    def tru(self, msg: str) -> str:
        """Translate without escaping."""
        return self.get_current_language().catalog.gettext(msg)

    def tr(self, msg: str) -> str:
        """Translate ``msg``; the source text is returned when untranslated."""
        return self._escape(self.tru(msg))

    def trc(self, context: str, msg: str) -> str:
        """Translate ``msg`` as used in ``context`` (e.g. "noun", "verb")."""
        catalog = self.get_current_language().catalog
        return self._escape(catalog.pgettext(context, msg))

    def trfu(self, msg: str, *args: Any) -> str:
        """Translate and substitute placeholders, without escaping.

        Apostrophes and ``{`` are special in ``msg``; see MessageFormatter.
        """
        setting = self.get_current_language()
        return setting.formatter.format(setting.catalog.gettext(msg), *args)

    def trf(self, msg: str, *args: Any) -> str:
        """Translate and substitute placeholders."""
        return self._escape(self.trfu(msg, *args))

    def trcf(self, context: str, msg: str, *args: Any) -> str:
        """Translate in ``context`` and substitute placeholders."""
        setting = self.get_current_language()
        return self._escape(setting.formatter.format(setting.catalog.pgettext(context, msg), *args))

    def tr_plural(self, singular: str, plural: str, n: int, *args: Any) -> str:
        """Translate a message whose wording depends on a count.

        ``n`` only selects the plural form; it is not substituted unless
        also passed in ``args``. The result is wikified.

        Example:
            i18n.tr_plural("There is {0} apple", "There are {0} apples", n, n)
        """
        setting = self.get_current_language()
        translated = setting.catalog.ngettext(singular, plural, n)
        return wikified(self._escape(setting.formatter.format(translated, *args)))

    def trc_plural(self, context: str, singular: str, plural: str, n: int, *args: Any) -> str:
        """``tr_plural`` with a disambiguating context."""
        setting = self.get_current_language()
        translated = setting.catalog.npgettext(context, singular, plural, n)
        return wikified(self._escape(setting.formatter.format(translated, *args)))

    def trw(self, msg: str) -> str:
        return wikified(self.tr(msg))

    def trcw(self, context: str, msg: str) -> str:
        return wikified(self.trc(context, msg))

    def trfw(self, msg: str, *args: Any) -> str:
        return wikified(self.trf(msg, *args))

    def trcfw(self, context: str, msg: str, *args: Any) -> str:
        return wikified(self.trcf(context, msg, *args))

    def trj(self, msg: str) -> str:
        """Translate and escape for a JavaScript string literal."""
        return escape_javascript(self.tru(msg))

    def trfj(self, msg: str, *args: Any) -> str:
        return escape_javascript(self.trfu(msg, *args))

    # Text helpers

    @staticmethod
    def wikified(msg: str) -> str:
        return wikified(msg)

    def localized_strings_as_list(self, words: Optional[Sequence[str]], inclusive: bool = True) -> str:
        """Join already-translated words into a sentence list.

        ["A", "B", "C"] gives "A, B, and C" (or "A, B, or C" when not
        inclusive). Separators and conjunctions are translatable.
        """
        if not words:
            return ""
        if len(words) == 1:
            return words[0]

        comma = self.trc("The separator for lists in a sentence (e.g. a, b, and c)", ",")
        if inclusive:
            just_two = self.trc("a list in a sentence with more exactly two things", "{0} and {1}")
            compound = self.trc("ending of list in a sentence with three or more things", "{0}, and {1}")
        else:
            just_two = self.trc(
                "a list of options in a sentence with exactly two things", "{0} or {1}"
            )
            compound = self.trc(
                "ending of list of options in a sentence with three or more things", "{0}, or {1}"
            )

        if len(words) == 2:
            return self.trf(just_two, words[0], words[1])

        head = f"{comma} ".join(words[:-1])
        return self.trf(compound, head, words[-1])

    def full_name(self, first_name: str, last_name: str) -> str:
        """Compose a person's name in the order the translation dictates."""
        return self.trcf("full_name", "{0} {1}", first_name, last_name)

    def image_url(self, url: Optional[str]) -> Optional[str]:
        """Insert the language before the extension ("logo.png" ->
        "logo_fr.png"); English and extensionless URLs are unchanged."""
        language = self.get_language()
        if language == "en" or not url:
            return url
        index = url.rfind(".")
        if index == -1:
            return url
        return f"{url[:index]}_{language}{url[index:]}"

    def whole_number_to_percentage(self, n: int) -> str:
        """Format 88 as "88%"."""
        return self.trf("{0,number,percent}", n / 100.0)
