"""Module-level convenience functions.

Thin wrappers over the process-wide I18nService so templates and scripts
can call ``tr("Remove")`` without holding a service reference.

Usage:
    from localekit.i18n import api as I

    I.set_language("fr")
    I.tr("Remove")
    I.trf("{0} of {1}", 3, 10)
"""

from typing import Any, Optional, Sequence

from localekit.i18n.formats import DateFormat
from localekit.i18n.formatting import LocaleFormatter
from localekit.i18n.language import LanguageSetting
from localekit.i18n.models import SHORT
from localekit.i18n.providers import LanguageSettingsProvider
from localekit.i18n.text import wikified
from localekit.services.providers import get_i18n_service


def set_language(locale: Any) -> None:
    get_i18n_service().set_language(locale)


def get_current_language() -> LanguageSetting:
    return get_i18n_service().get_current_language()


def get_default_language() -> LanguageSetting:
    return get_i18n_service().get_default_language()


def get_language() -> str:
    return get_i18n_service().get_language()


def set_language_settings_provider(provider: LanguageSettingsProvider) -> None:
    get_i18n_service().set_language_settings_provider(provider)


def supports(lang: Any, country: Optional[str] = None) -> bool:
    return get_i18n_service().supports(lang, country)


def register_custom_date_format(
    format_id: int,
    lang: str,
    country: Optional[str],
    pattern: str,
    acceptable_for_input: bool = False,
) -> None:
    get_i18n_service().register_custom_date_format(
        format_id, lang, country, pattern, acceptable_for_input
    )


def set_default_date_format(lang: str, country: Optional[str], pattern: str) -> None:
    get_i18n_service().set_default_date_format(lang, country, pattern)


def resolve_date_format(format_id: int, alternate: int = SHORT) -> DateFormat:
    return get_i18n_service().resolve_date_format(format_id, alternate)


def formatter() -> LocaleFormatter:
    return get_i18n_service().formatter


def tr(msg: str) -> str:
    return get_i18n_service().tr(msg)


def tru(msg: str) -> str:
    return get_i18n_service().tru(msg)


def trc(context: str, msg: str) -> str:
    return get_i18n_service().trc(context, msg)


def trf(msg: str, *args: Any) -> str:
    return get_i18n_service().trf(msg, *args)


def trfu(msg: str, *args: Any) -> str:
    return get_i18n_service().trfu(msg, *args)


def trcf(context: str, msg: str, *args: Any) -> str:
    return get_i18n_service().trcf(context, msg, *args)


def tr_plural(singular: str, plural: str, n: int, *args: Any) -> str:
    return get_i18n_service().tr_plural(singular, plural, n, *args)


def trw(msg: str) -> str:
    return get_i18n_service().trw(msg)


def trcw(context: str, msg: str) -> str:
    return get_i18n_service().trcw(context, msg)


def trfw(msg: str, *args: Any) -> str:
    return get_i18n_service().trfw(msg, *args)


def trcfw(context: str, msg: str, *args: Any) -> str:
    return get_i18n_service().trcfw(context, msg, *args)


def trj(msg: str) -> str:
    return get_i18n_service().trj(msg)


def trfj(msg: str, *args: Any) -> str:
    return get_i18n_service().trfj(msg, *args)


def localized_strings_as_list(words: Sequence[str], inclusive: bool = True) -> str:
    return get_i18n_service().localized_strings_as_list(words, inclusive)


def full_name(first_name: str, last_name: str) -> str:
    return get_i18n_service().full_name(first_name, last_name)


def image_url(url: Optional[str]) -> Optional[str]:
    return get_i18n_service().image_url(url)


def whole_number_to_percentage(n: int) -> str:
    return get_i18n_service().whole_number_to_percentage(n)


__all__ = [
    "set_language",
    "get_current_language",
    "get_default_language",
    "get_language",
    "set_language_settings_provider",
    "supports",
    "register_custom_date_format",
    "set_default_date_format",
    "resolve_date_format",
    "formatter",
    "tr",
    "tru",
    "trc",
    "trf",
    "trfu",
    "trcf",
    "tr_plural",
    "trw",
    "trcw",
    "trfw",
    "trcfw",
    "trj",
    "trfj",
    "wikified",
    "localized_strings_as_list",
    "full_name",
    "image_url",
    "whole_number_to_percentage",
]
