"""Unit tests for localekit.i18n.service module.

Tests cover:
- Language selection and catalog fallback through the facade
- Translation helpers (tr, trc, trf, plurals, wiki, JavaScript)
- Custom and default date formats
- Provider swapping and locale contexts
- Text helpers (lists, names, image URLs, percentages)
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest
import structlog

from localekit.i18n import (
    EMPTY_CATALOG,
    LONG,
    SHORT,
    DateFormat,
    GlobalLanguageSettingsProvider,
    I18nService,
    InvalidFormatIdError,
    LocaleTag,
)
from localekit.i18n.text import escape_html
from localekit.logging import get_bound_locale
from tests.factories.i18n import make_i18n_settings


@pytest.mark.unit
class TestLanguageSelection:
    """Tests for set_language() and the current setting."""

    def test_default_language(self, i18n_service):
        """A context that never set a language gets the default."""
        setting = i18n_service.get_current_language()

        assert setting.locale == LocaleTag("en", "US")
        assert setting is i18n_service.get_default_language()
        assert i18n_service.get_language() == "en"

    def test_language_fallback_translation(self, i18n_service):
        """fr_CA has no catalog, so the fr catalog translates."""
        i18n_service.set_language("fr_CA")

        assert i18n_service.tr("Remove") == "Éliminer"
        assert i18n_service.get_current_language().locale == LocaleTag("fr", "CA")

    def test_unknown_locale_passes_through(self, i18n_service):
        """An unknown locale translates nothing and raises nothing."""
        i18n_service.set_language("xx")

        assert i18n_service.tr("Remove") == "Remove"
        assert i18n_service.get_current_language().catalog is EMPTY_CATALOG

    def test_bare_language_gets_default_country(self, i18n_service):
        """"fr" becomes fr_US with the default country."""
        i18n_service.set_language("fr")

        assert i18n_service.get_current_language().locale == LocaleTag("fr", "US")
        assert i18n_service.get_language() == "fr"
        assert i18n_service.tr("Remove") == "Éliminer"

    def test_configured_default_country(self):
        """The default country is configurable."""
        service = I18nService(settings=make_i18n_settings(default_country="GB"))
        assert service.to_locale("en") == LocaleTag("en", "GB")

    def test_locale_tag_is_used_as_is(self, i18n_service):
        """A LocaleTag without region is not given the default country."""
        i18n_service.set_language(LocaleTag("fr"))
        assert i18n_service.get_current_language().locale == LocaleTag("fr")

    def test_hyphenated_tag(self, i18n_service):
        """Tags with - separators are accepted."""
        i18n_service.set_language("en-au")
        assert i18n_service.tr("Add") == "Put it"

    def test_exact_catalog_preferred(self, i18n_service):
        """en_AU has its own catalog, distinct from en."""
        i18n_service.set_language("en_AU")
        assert i18n_service.tr("Add") == "Put it"
        i18n_service.set_language("en_GB")
        assert i18n_service.tr("Add") == "Add"

    @pytest.mark.parametrize(
        "lang,country,expected",
        [
            ("fr", None, True),
            ("fr", "CA", True),
            ("en", None, True),
            ("en", "AU", True),
            ("xx", None, False),
            ("", None, False),
            (None, None, False),
        ],
    )
    def test_supports(self, i18n_service, lang, country, expected):
        """supports() checks for a catalog, with language fallback."""
        assert i18n_service.supports(lang, country) is expected

    def test_supports_locale_tag(self, i18n_service):
        """supports() accepts LocaleTag instances."""
        assert i18n_service.supports(LocaleTag("fr", "CA"))


@pytest.mark.unit
class TestTranslation:
    """Tests for the tr* helpers."""

    @pytest.fixture
    def french(self, i18n_service):
        i18n_service.set_language("fr_FR")
        return i18n_service

    def test_tr_miss_returns_source(self, french):
        """Untranslated text is returned unchanged."""
        assert french.tr("Cancel") == "Cancel"

    def test_trc(self, french):
        """Context selects the translation."""
        assert french.trc("verb", "Run") == "Exécuter"
        assert french.trc("noun", "Run") == "Course"
        assert french.trc("adverb", "Run") == "Run"

    def test_trf(self, french):
        """Arguments are substituted into the translation."""
        assert french.trf("{0} of {1}", 3, 10) == "3 sur 10"

    def test_trf_untranslated(self, i18n_service):
        """Untranslated patterns are still formatted."""
        assert i18n_service.trf("{0} of {1}", 3, 10) == "3 of 10"

    def test_trcf(self, french):
        """Context and arguments combine."""
        assert french.trcf("full_name", "{0} {1}", "Jean", "Dupont") == "Dupont Jean"

    def test_trfw(self, french):
        """Wiki markup in the translation becomes HTML."""
        assert french.trfw("Hello **{0}**", "Ana") == "Bonjour <b>Ana</b>"

    def test_trw_and_trcw(self, french):
        """trw() and trcw() wikify the translation."""
        assert french.trw("//Remove//") == "<i>Remove</i>"
        assert french.trcw("verb", "Run") == "Exécuter"

    def test_trcfw(self, french):
        """trcfw() formats and wikifies."""
        assert french.trcfw("x", "**{0}**", "y") == "<b>y</b>"

    def test_trj(self, french):
        """trj() escapes for JavaScript."""
        assert french.trj("Remove") == "\\u00C9liminer"
        assert french.trfj("{0} of {1}", "l'un", 2) == "l\\'un sur 2"

    def test_plural(self, french):
        """The count selects the plural form; arguments are separate."""
        assert french.tr_plural("There is {0} apple", "There are {0} apples", 1, 1) == "Il y a 1 pomme"
        assert french.tr_plural("There is {0} apple", "There are {0} apples", 3, 3) == "Il y a 3 pommes"

    def test_plural_untranslated(self, i18n_service):
        """Untranslated plurals use the source forms."""
        assert i18n_service.tr_plural("There is {0} pear", "There are {0} pears", 1, 1) == "There is 1 pear"
        assert i18n_service.tr_plural("There is {0} pear", "There are {0} pears", 2, 2) == "There are 2 pears"

    def test_trc_plural(self, french):
        """Context plurals fall back to the source forms."""
        assert french.trc_plural("cart", "{0} item", "{0} items", 2, 2) == "2 items"


@pytest.mark.unit
class TestEscaping:
    """The configured escape applies to tr* output."""

    def test_html_escape_from_settings(self):
        """I18N_ESCAPE=html escapes translations."""
        service = I18nService(settings=make_i18n_settings(escape="html"))
        service.set_language("fr")

        assert service.tr("Save & close") == "Enregistrer &amp; fermer"
        assert service.tru("Save & close") == "Enregistrer & fermer"
        assert service.escape_function is escape_html

    def test_set_escape_function(self, i18n_service):
        """The escape can be set by name or as a callable."""
        i18n_service.set_language("fr")
        i18n_service.set_escape_function("html")
        assert i18n_service.tr("It's <done>") == "C'est &lt;fini&gt;"

        i18n_service.set_escape_function(str.upper)
        assert i18n_service.tr("Remove") == "ÉLIMINER"

    def test_trj_ignores_html_escape(self):
        """JavaScript escaping replaces the configured escape."""
        service = I18nService(settings=make_i18n_settings(escape="html"))
        service.set_language("fr")
        assert service.trj("Save & close") == "Enregistrer & fermer"


@pytest.mark.unit
class TestDateFormats:
    """Custom and default date formats through the facade."""

    def test_register_and_resolve(self, i18n_service):
        """A language-wide format applies to every country."""
        i18n_service.register_custom_date_format(100, "en", "AU", "dd/MM/yyyy", True)
        i18n_service.register_custom_date_format(100, "en", None, "MM/dd/yyyy")

        i18n_service.set_language("en_US")
        assert i18n_service.resolve_date_format(100).pattern == "MM/dd/yyyy"

        i18n_service.set_language("en_AU")
        assert i18n_service.resolve_date_format(100).pattern == "dd/MM/yyyy"

    def test_resolve_without_registration(self, i18n_service):
        """With nothing registered the alternate style is used."""
        assert i18n_service.resolve_date_format(100) == DateFormat.for_style(SHORT, "en_US")
        assert i18n_service.resolve_date_format(100, LONG) == DateFormat.for_style(LONG, "en_US")

    def test_reserved_id_raises(self, i18n_service):
        """Reserved ids are a programming error."""
        with pytest.raises(InvalidFormatIdError):
            i18n_service.register_custom_date_format(SHORT, "en", "US", "dd/MM/yyyy")

    def test_default_date_format(self, i18n_service):
        """set_default_date_format() changes date_to_string() output and
        input parsing."""
        i18n_service.set_default_date_format("de", "DE", "dd.MM.yyyy")
        i18n_service.set_language("de_DE")
        formatter = i18n_service.formatter

        assert formatter.date_to_string(date(2024, 1, 15)) == "15.01.2024"
        assert formatter.string_to_date("15.01.2024") == datetime(2024, 1, 15)
        assert formatter.date_picker_format() == "dmy"

    def test_null_date_test(self, i18n_service):
        """The null-date predicate decides which dates format as ""."""
        i18n_service.set_null_date_test(lambda d: d is None or d.year < 1900)

        assert i18n_service.is_null_date(date(1800, 1, 1))
        assert i18n_service.formatter.date_to_string(date(1800, 1, 1)) == ""
        assert i18n_service.formatter.date_to_string(date(2024, 1, 15)) == "1/15/24"

    def test_null_date_test_required(self, i18n_service):
        """A None predicate is rejected."""
        with pytest.raises(ValueError):
            i18n_service.set_null_date_test(None)

    def test_default_date(self, i18n_service):
        """Unparseable input gives the default date."""
        default = datetime(2000, 1, 1)
        i18n_service.set_default_date(default)

        assert i18n_service.get_default_date() == default
        assert i18n_service.formatter.string_to_date("not a date") == default
        assert i18n_service.formatter.string_to_date("") == default


@pytest.mark.unit
class TestProviders:
    """Provider selection and swapping."""

    def test_context_provider_isolates_threads(self, memory_i18n_service):
        """Concurrent requests in de and ja each see their own language."""
        barrier = threading.Barrier(20)

        def handle(index):
            locale = "de" if index % 2 else "ja"
            barrier.wait()
            memory_i18n_service.set_language(locale)
            return locale, [memory_i18n_service.tr("Remove") for _ in range(100)]

        with ThreadPoolExecutor(max_workers=20) as executor:
            results = list(executor.map(handle, range(20)))

        expected = {"de": "Entfernen", "ja": "削除"}
        for locale, translations in results:
            assert set(translations) == {expected[locale]}

    def test_global_provider_is_shared(self, global_i18n_service):
        """With the global provider a thread's change is seen everywhere."""
        thread = threading.Thread(target=global_i18n_service.set_language, args=("fr",))
        thread.start()
        thread.join()

        assert global_i18n_service.tr("Remove") == "Éliminer"

    def test_swap_provider(self, i18n_service):
        """A swapped provider takes effect; held settings are unchanged."""
        i18n_service.set_language("fr")
        held = i18n_service.get_current_language()

        provider = GlobalLanguageSettingsProvider(i18n_service.create_setting, "en_AU")
        i18n_service.set_language_settings_provider(provider)

        assert i18n_service.language_settings_provider is provider
        assert i18n_service.tr("Add") == "Put it"
        assert held.catalog.gettext("Remove") == "Éliminer"

    def test_locale_context(self, i18n_service):
        """locale_context() sets the language and binds it to logs."""
        with i18n_service.locale_context("fr_CA") as setting:
            assert setting.locale == LocaleTag("fr", "CA")
            assert i18n_service.tr("Remove") == "Éliminer"
            assert structlog.contextvars.get_contextvars()["locale"] == "fr_CA"

        assert i18n_service.tr("Remove") == "Remove"
        assert "locale" not in structlog.contextvars.get_contextvars()

    def test_nested_locale_context_restores_log_locale(self, i18n_service):
        """After an inner block, logs carry the outer locale again."""
        with i18n_service.locale_context("fr_FR"):
            with i18n_service.locale_context("de_DE"):
                assert get_bound_locale() == "de_DE"

            assert str(i18n_service.get_current_language().locale) == "fr_FR"
            assert get_bound_locale() == "fr_FR"

        assert get_bound_locale() is None


@pytest.mark.unit
class TestTextHelpers:
    """Tests for list joining, names, image URLs and percentages."""

    @pytest.mark.parametrize(
        "words,inclusive,expected",
        [
            ([], True, ""),
            (["A"], True, "A"),
            (["A", "B"], True, "A and B"),
            (["A", "B", "C"], True, "A, B, and C"),
            (["A", "B"], False, "A or B"),
            (["A", "B", "C", "D"], False, "A, B, C, or D"),
        ],
    )
    def test_localized_strings_as_list(self, i18n_service, words, inclusive, expected):
        """Words are joined with commas and a conjunction."""
        assert i18n_service.localized_strings_as_list(words, inclusive) == expected

    def test_localized_list_french(self, i18n_service):
        """The conjunction is translatable."""
        i18n_service.set_language("fr")
        assert i18n_service.localized_strings_as_list(["A", "B", "C"]) == "A, B et C"
        assert i18n_service.localized_strings_as_list(["A", "B"]) == "A et B"

    def test_full_name(self, i18n_service):
        """Name order follows the translation."""
        assert i18n_service.full_name("Jean", "Dupont") == "Jean Dupont"
        i18n_service.set_language("fr")
        assert i18n_service.full_name("Jean", "Dupont") == "Dupont Jean"

    def test_image_url(self, i18n_service):
        """The language is inserted before the extension."""
        assert i18n_service.image_url("img/logo.png") == "img/logo.png"

        i18n_service.set_language("fr")
        assert i18n_service.image_url("img/logo.png") == "img/logo_fr.png"
        assert i18n_service.image_url("logo") == "logo"
        assert i18n_service.image_url(None) is None

    def test_whole_number_to_percentage(self, i18n_service):
        """88 formats as 88%."""
        assert i18n_service.whole_number_to_percentage(88) == "88%"

    def test_wikified(self):
        """The static wikified() helper converts markup."""
        assert I18nService.wikified("**x**") == "<b>x</b>"
