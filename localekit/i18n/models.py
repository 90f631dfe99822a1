"""Locale and format-key models for the i18n system.

Defines the value types shared by the format registry, the catalog cache and
the locale providers.
"""

from dataclasses import dataclass
from typing import Optional, Union

# Date style ids. SHORT, MEDIUM and LONG resolve directly to the locale's
# standard pattern; FULL is only used for explicit style lookups.
FULL = 0
LONG = 1
MEDIUM = 2
SHORT = 3

BUILTIN_STYLES = {
    FULL: "full",
    LONG: "long",
    MEDIUM: "medium",
    SHORT: "short",
}

# Ids at or below the threshold are reserved for built-in styles.
RESERVED_FORMAT_ID_THRESHOLD = 8

# Deployment-wide default date format; the smallest legal custom id.
DEFAULT_DATE_FORMAT_ID = 9

ISO_DATE_PATTERN = "yyyy-MM-dd"


class InvalidFormatIdError(ValueError):
    """Raised when registering a custom format under a reserved id."""

    def __init__(self, format_id: int):
        self.format_id = format_id
        super().__init__(
            f"Custom date format id must be greater than "
            f"{RESERVED_FORMAT_ID_THRESHOLD}: {format_id}"
        )


def normalize_locale(tag: Optional[str], default: str = "en_US") -> str:
    """Return the canonical ``ll`` or ``ll_RR`` form of a locale string.

    Accepts ``-`` or ``_`` as separator and any letter case. Script and
    variant subtags are kept after the region. An empty tag yields
    ``default``.

    Args:
        tag: Locale string (e.g., "fr-ca", "EN_au", "de").
        default: Locale returned for an empty tag.

    Returns:
        Normalized locale string (e.g., "fr_CA", "en_AU", "de").
    """
    if not tag or not str(tag).strip():
        return default

    parts = [p for p in str(tag).strip().replace("-", "_").split("_") if p]
    if not parts:
        return default

    return "_".join([parts[0].lower()] + [_normalize_subtag(p) for p in parts[1:]])


def _normalize_subtag(part: str) -> str:
    """Title-case a four-letter script subtag, upper-case anything else."""
    if len(part) == 4 and part.isalpha():
        return part.title()
    return part.upper()


def language_only(locale: str) -> str:
    """Drop everything after the first region separator.

    Args:
        locale: Locale string.

    Returns:
        The language part (e.g., "fr" from "fr_CA"); unchanged if there is
        no region.
    """
    return locale.split("_", 1)[0]


@dataclass(frozen=True)
class LocaleTag:
    """A language with an optional region (e.g., "en", "en_AU").

    Frozen so it can be used as a dictionary key. Equality follows the
    normalized string form.

    Attributes:
        language: Lower-case ISO 639 language code.
        region: Upper-case region code (script subtags title-cased), or ""
            when absent.
    """

    language: str
    region: str = ""

    def __post_init__(self):
        object.__setattr__(self, "language", (self.language or "").lower())
        subtags = [p for p in (self.region or "").replace("-", "_").split("_") if p]
        object.__setattr__(self, "region", "_".join(_normalize_subtag(p) for p in subtags))

    def __str__(self) -> str:
        """Return the normalized locale string.

        Returns:
            "ll_RR" or "ll".
        """
        if self.region:
            return f"{self.language}_{self.region}"
        return self.language

    @classmethod
    def parse(cls, value: Union[str, "LocaleTag", None], default: str = "en_US") -> "LocaleTag":
        """Create a LocaleTag from a locale string.

        Parsing never fails: separators and case are normalized, and an
        empty value yields ``default``.

        Args:
            value: Locale string or LocaleTag.
            default: Locale used for empty input.

        Returns:
            LocaleTag instance.
        """
        if isinstance(value, LocaleTag):
            return value
        normalized = normalize_locale(value, default=default)
        language, _, region = normalized.partition("_")
        return cls(language=language, region=region)

    @property
    def has_region(self) -> bool:
        return bool(self.region)

    def without_region(self) -> "LocaleTag":
        """Return the language-only projection of this tag.

        Returns:
            A tag without region, or ``self`` when it already has none.
        """
        if not self.region:
            return self
        return LocaleTag(language=self.language)

    def to_babel(self) -> str:
        """Return the identifier understood by Babel (same as ``str``)."""
        return str(self)


@dataclass(frozen=True)
class FormatKey:
    """Identity of "format id X in locale Y" in the custom format registry.

    Attributes:
        format_id: Custom format id.
        locale: Normalized locale string.
    """

    format_id: int
    locale: str

    @classmethod
    def of(cls, format_id: int, locale: Union[str, LocaleTag]) -> "FormatKey":
        return cls(format_id=format_id, locale=normalize_locale(str(locale)))

    def without_region(self) -> "FormatKey":
        """Return the same format id for the language-only locale.

        Returns:
            A key with the region stripped, or ``self`` when it has none.
        """
        if "_" not in self.locale:
            return self
        return FormatKey(format_id=self.format_id, locale=language_only(self.locale))
