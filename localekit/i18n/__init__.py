"""i18n system - locale resolution, translation and locale-aware formatting.

Main components:
- models: LocaleTag, FormatKey, reserved format ids
- formats: DateFormat (LDML patterns formatted and parsed with Babel)
- registry: CustomFormatRegistry for per-locale custom date formats
- catalog: TranslationCatalog, DictCatalog, GettextCatalog, EMPTY_CATALOG
- loader: CatalogLoader implementations (module, YAML, gettext, in-memory)
- cache: TranslationCatalogCache with exact -> language -> empty fallback
- language: LanguageSetting bundles
- providers: global and per-context current-language providers
- messageformat: MessageFormatter for "{0,number,currency}" placeholders
- formatting: LocaleFormatter for dates, money, numbers and percentages
- text: wikifier and escape functions
- resolvers: Accept-Language resolution
- service: I18nService facade
"""

from localekit.i18n.cache import TranslationCatalogCache
from localekit.i18n.catalog import (
    EMPTY_CATALOG,
    DictCatalog,
    GettextCatalog,
    TranslationCatalog,
)
from localekit.i18n.formats import DateFormat
from localekit.i18n.formatting import DateOptions, LocaleFormatter
from localekit.i18n.language import LanguageSetting
from localekit.i18n.loader import (
    CatalogLoader,
    DictCatalogLoader,
    GettextCatalogLoader,
    ModuleCatalogLoader,
    YAMLCatalogLoader,
    create_loader,
)
from localekit.i18n.messageformat import MessageFormatError, MessageFormatter
from localekit.i18n.models import (
    DEFAULT_DATE_FORMAT_ID,
    FULL,
    LONG,
    MEDIUM,
    RESERVED_FORMAT_ID_THRESHOLD,
    SHORT,
    FormatKey,
    InvalidFormatIdError,
    LocaleTag,
)
from localekit.i18n.providers import (
    ContextLanguageSettingsProvider,
    GlobalLanguageSettingsProvider,
    LanguageSettingsProvider,
)
from localekit.i18n.registry import CustomFormatRegistry
from localekit.i18n.resolvers import LanguageNegotiator, LocaleResolver
from localekit.i18n.service import I18nService

__all__ = [
    "LocaleTag",
    "FormatKey",
    "InvalidFormatIdError",
    "FULL",
    "LONG",
    "MEDIUM",
    "SHORT",
    "RESERVED_FORMAT_ID_THRESHOLD",
    "DEFAULT_DATE_FORMAT_ID",
    "DateFormat",
    "CustomFormatRegistry",
    "TranslationCatalog",
    "DictCatalog",
    "GettextCatalog",
    "EMPTY_CATALOG",
    "CatalogLoader",
    "ModuleCatalogLoader",
    "YAMLCatalogLoader",
    "GettextCatalogLoader",
    "DictCatalogLoader",
    "create_loader",
    "TranslationCatalogCache",
    "LanguageSetting",
    "LanguageSettingsProvider",
    "GlobalLanguageSettingsProvider",
    "ContextLanguageSettingsProvider",
    "MessageFormatter",
    "MessageFormatError",
    "LocaleFormatter",
    "DateOptions",
    "LocaleResolver",
    "LanguageNegotiator",
    "I18nService",
]
