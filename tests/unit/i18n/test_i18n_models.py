"""Unit tests for localekit.i18n.models module.

Tests cover:
- normalize_locale() and language_only()
- LocaleTag parsing and region stripping
- FormatKey identity and region stripping
- InvalidFormatIdError
"""

import pytest

from localekit.i18n.models import (
    DEFAULT_DATE_FORMAT_ID,
    RESERVED_FORMAT_ID_THRESHOLD,
    FormatKey,
    InvalidFormatIdError,
    LocaleTag,
    language_only,
    normalize_locale,
)


@pytest.mark.unit
class TestNormalizeLocale:
    """Tests for normalize_locale()."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("fr_FR", "fr_FR"),
            ("fr-ca", "fr_CA"),
            ("EN_au", "en_AU"),
            ("de", "de"),
            ("  pt-br ", "pt_BR"),
            ("zh-hant-tw", "zh_Hant_TW"),
        ],
    )
    def test_normalizes_separator_and_case(self, tag, expected):
        """Separators and letter case are canonicalized."""
        assert normalize_locale(tag) == expected

    def test_empty_tag_uses_default(self):
        """Empty or blank input yields the default."""
        assert normalize_locale("") == "en_US"
        assert normalize_locale(None) == "en_US"
        assert normalize_locale("   ", default="fr") == "fr"

    def test_language_only(self):
        """language_only() drops the region."""
        assert language_only("fr_CA") == "fr"
        assert language_only("de") == "de"


@pytest.mark.unit
class TestLocaleTag:
    """Tests for LocaleTag."""

    def test_str_with_region(self):
        """A tag with region renders as ll_RR."""
        assert str(LocaleTag("fr", "fr")) == "fr_FR"

    def test_str_without_region(self):
        """A tag without region renders as the language."""
        assert str(LocaleTag("DE")) == "de"

    def test_parse(self):
        """parse() splits language and region."""
        tag = LocaleTag.parse("en-au")
        assert tag.language == "en"
        assert tag.region == "AU"
        assert tag.has_region

    @pytest.mark.parametrize("tag", ["zh-Hant-TW", "ZH_HANT_TW", "zh_hant_tw"])
    def test_parse_keeps_script_case(self, tag):
        """A script subtag is title-cased like normalize_locale() does."""
        parsed = LocaleTag.parse(tag)
        assert parsed.region == "Hant_TW"
        assert str(parsed) == normalize_locale(tag) == "zh_Hant_TW"

    def test_direct_construction_normalizes_subtags(self):
        """Subtags given to the constructor follow the same rule."""
        assert str(LocaleTag("sr", "latn-rs")) == "sr_Latn_RS"

    def test_parse_passes_tags_through(self):
        """parse() returns LocaleTag instances unchanged."""
        tag = LocaleTag("ja")
        assert LocaleTag.parse(tag) is tag

    def test_parse_empty_uses_default(self):
        """parse() never fails on empty input."""
        assert LocaleTag.parse(None, default="fr_CA") == LocaleTag("fr", "CA")

    def test_equality_and_hash(self):
        """Equal tags are interchangeable dictionary keys."""
        lookup = {LocaleTag("fr", "CA"): "found"}
        assert lookup[LocaleTag.parse("fr-CA")] == "found"

    def test_without_region(self):
        """without_region() drops the region."""
        assert LocaleTag("fr", "CA").without_region() == LocaleTag("fr")

    def test_without_region_is_idempotent(self):
        """A tag with no region returns itself."""
        tag = LocaleTag("fr")
        assert tag.without_region() is tag
        assert tag.without_region().without_region() is tag

    def test_to_babel(self):
        """to_babel() gives the underscore form Babel expects."""
        assert LocaleTag("pt", "BR").to_babel() == "pt_BR"


@pytest.mark.unit
class TestFormatKey:
    """Tests for FormatKey."""

    def test_of_normalizes_locale(self):
        """of() accepts strings and tags in any form."""
        assert FormatKey.of(100, "en-au") == FormatKey(100, "en_AU")
        assert FormatKey.of(100, LocaleTag("en", "AU")) == FormatKey(100, "en_AU")

    def test_keys_differ_by_id_and_locale(self):
        """Both the id and the locale take part in equality."""
        assert FormatKey(100, "en_AU") != FormatKey(101, "en_AU")
        assert FormatKey(100, "en_AU") != FormatKey(100, "en")

    def test_without_region(self):
        """without_region() keeps the id and drops the region."""
        assert FormatKey(100, "en_AU").without_region() == FormatKey(100, "en")

    def test_without_region_is_idempotent(self):
        """A language-only key returns itself."""
        key = FormatKey(100, "en")
        assert key.without_region() is key
        assert FormatKey(100, "en_AU").without_region().without_region() == key


@pytest.mark.unit
class TestInvalidFormatIdError:
    """Tests for InvalidFormatIdError."""

    def test_is_value_error(self):
        """The error is a ValueError carrying the rejected id."""
        error = InvalidFormatIdError(3)
        assert isinstance(error, ValueError)
        assert error.format_id == 3
        assert str(RESERVED_FORMAT_ID_THRESHOLD) in str(error)

    def test_default_id_is_first_legal_id(self):
        """The default format id is the smallest id above the threshold."""
        assert DEFAULT_DATE_FORMAT_ID == RESERVED_FORMAT_ID_THRESHOLD + 1
