"""Locale-sensitive formatting and parsing of dates, money and numbers.

LocaleFormatter is bound to one LanguageSetting. Date output goes through
the custom format registry, so a deployment's registered formats apply
everywhere. Parsing is tolerant: a failure returns the caller's default
instead of raising.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from localekit.i18n.formats import DateFormat
from localekit.i18n.language import LanguageSetting
from localekit.i18n.models import DEFAULT_DATE_FORMAT_ID, SHORT
from localekit.i18n.registry import CustomFormatRegistry
from localekit.logging import get_module_logger

logger = get_module_logger()

Numeric = Union[int, float, Decimal]

NARROW_NBSP = "\u202f"
NBSP = "\xa0"

_TIMESTAMP_RE = re.compile(r"^(.*)\s+(\d+:\d+(?::\d+)?(?:\s*[\w.]+)?)$")
_ENTITY_RE = re.compile(r"&[^;]*;")
_WHITESPACE_RE = re.compile(r"\s+")

ISO_TIMESTAMP_PATTERNS = ("yyyy-MM-dd HH:mm:ss.SSS", "yyyy-MM-dd HH:mm:ss")


def is_none_date(value: Optional[date]) -> bool:
    return value is None


@dataclass
class DateOptions:
    """How null dates are recognised and what failed parses return.

    Attributes:
        null_date_test: Returns True for values that mean "no date";
            those format to "".
        default_date: Returned by ``string_to_date`` for empty or
            unparseable input.
    """

    null_date_test: Callable[[Optional[date]], bool] = field(default=is_none_date)
    default_date: Optional[datetime] = None

    def is_null_date(self, value: Optional[date]) -> bool:
        return self.null_date_test(value)


class LocaleFormatter:
    """Formats and parses values for one LanguageSetting.

    Attributes:
        setting: The language setting values are formatted for.
        registry: Custom date format registry.
        options: Null-date handling.
    """

    def __init__(
        self,
        setting: LanguageSetting,
        registry: CustomFormatRegistry,
        options: Optional[DateOptions] = None,
    ):
        self.setting = setting
        self.registry = registry
        self.options = options or DateOptions()

    @property
    def locale(self) -> str:
        return str(self.setting.locale)

    # Dates

    def date_to_string(self, value: Optional[date], format_id: int = DEFAULT_DATE_FORMAT_ID) -> str:
        """Format a date with a built-in style or registered custom format.

        Args:
            value: Date or datetime; null dates give "".
            format_id: Format id resolved through the registry (SHORT as the
                alternate).
        """
        if self.options.is_null_date(value):
            return ""
        return self.registry.resolve_format(format_id, self.locale, SHORT).format(value)

    def date_to_short_string(self, value: Optional[date]) -> str:
        return self.date_to_string(value, SHORT)

    def string_to_date(self, text: Optional[str]) -> Optional[datetime]:
        """Parse a date typed by a user.

        Tries the locale's SHORT, MEDIUM and LONG formats, then ISO
        ``yyyy-MM-dd``, then the custom input formats, in that order.

        Returns:
            The parsed datetime, or the configured default date.
        """
        if not text or not text.strip():
            return self.options.default_date

        for fmt in self.registry.get_input_formats(self.locale):
            try:
                return fmt.parse(text)
            except ValueError:
                continue

        logger.debug("date_parse_failed", text=text, locale=self.locale)
        return self.options.default_date

    def preferred_date_format(self, format_id: int = SHORT) -> str:
        """LDML pattern of the format used for ``format_id``."""
        return self.registry.resolve_format(format_id, self.locale, SHORT).pattern

    def date_to_iso_string(self, value: Optional[date]) -> str:
        if self.options.is_null_date(value):
            return ""
        return value.strftime("%Y-%m-%d")

    def day_of_week(self, value: date, offset: int = 0, abbreviated: bool = False) -> str:
        """Localized weekday name of ``value`` shifted by ``offset`` days."""
        width = "abbreviated" if abbreviated else "wide"
        names = babel_dates.get_day_names(width, "stand-alone", self.setting.babel_locale)
        return names[(value.weekday() + offset) % 7]

    def month_name(self, month: int, abbreviated: bool = False) -> str:
        """Localized name of ``month`` (1-12)."""
        width = "abbreviated" if abbreviated else "wide"
        names = babel_dates.get_month_names(width, "stand-alone", self.setting.babel_locale)
        return names[month]

    def date_picker_format(self) -> str:
        """Field order of the default date format: 'mdy', 'dmy' or 'ymd'."""
        pattern = self.preferred_date_format(DEFAULT_DATE_FORMAT_ID)
        if pattern.startswith("d"):
            return "dmy"
        if pattern.startswith("y"):
            return "ymd"
        return "mdy"

    def date_picker_separator(self) -> str:
        """First non-digit character of today's date in the default format."""
        for ch in self.date_to_string(date.today()):
            if not ch.isdigit():
                return ch
        return "/"

    # Timestamps

    def timestamp_to_string(
        self,
        value: Optional[datetime],
        time_only: bool = False,
        show_seconds: bool = True,
        show_timezone: bool = False,
    ) -> str:
        """Format a timestamp as "<date> <time>" or just "<time>".

        Args:
            value: Datetime; null dates give "".
            time_only: Omit the date.
            show_seconds: Use the locale's medium time style instead of short.
            show_timezone: Append the timezone abbreviation.
        """
        if self.options.is_null_date(value):
            return ""
        if show_seconds:
            time_format = self.setting.long_time_format()
        else:
            time_format = self.setting.short_time_format()
        text = time_format.format(value)
        if show_timezone:
            text = f"{text} {self._timezone_name(value)}"
        if time_only:
            return text
        return f"{self.date_to_string(value)} {text}"

    @staticmethod
    def _timezone_name(value: datetime) -> str:
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.tzname() or ""
        return datetime.now().astimezone().tzname() or ""

    def string_to_timestamp(
        self, text: Optional[str], default: Optional[datetime] = None
    ) -> Optional[datetime]:
        """Parse "<date> <time>" text.

        The date part goes through ``string_to_date``; if that yields a null
        date, ``default`` supplies the day.
        """
        if not text or not text.strip():
            return default
        text = text.strip()
        match = _TIMESTAMP_RE.match(text)
        if match:
            date_part, time_part = match.group(1), match.group(2)
        else:
            date_part, _, time_part = text.partition(" ")

        day = self.string_to_date(date_part)
        if self.options.is_null_date(day):
            day = default
        if day is None:
            return default
        return self.string_to_time(day, time_part)

    def string_to_time(self, reference: date, text: str) -> datetime:
        """Combine the day of ``reference`` with a time parsed from ``text``.

        Tries the locale's time with seconds, its short time, then 24-hour
        ``H:m:s`` and ``H:m``. Unparseable text gives midnight.
        """
        parsed = time.min
        formats = (
            self.setting.long_time_format(),
            self.setting.short_time_format(),
            self.setting.military_time_format(True),
            self.setting.military_time_format(False),
        )
        for fmt in formats:
            try:
                parsed = fmt.parse(text).time()
                break
            except ValueError:
                continue
        else:
            logger.debug("time_parse_failed", text=text, locale=self.locale)
        day = reference.date() if isinstance(reference, datetime) else reference
        return datetime.combine(day, parsed)

    def timestamp_to_iso_string(self, value: Optional[datetime]) -> str:
        """Format as ``yyyy-MM-dd HH:mm:ss.SSS``."""
        if value is None:
            return ""
        return f"{value:%Y-%m-%d %H:%M:%S}.{value.microsecond // 1000:03d}"

    def iso_timestamp_to_date(
        self, text: Optional[str], default: Optional[datetime] = None
    ) -> Optional[datetime]:
        """Parse the output of ``timestamp_to_iso_string`` (or any ISO 8601
        timestamp)."""
        if not text or not text.strip():
            return default
        for pattern in ISO_TIMESTAMP_PATTERNS:
            try:
                return DateFormat(pattern, "en").parse(text)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text.strip())
        except ValueError:
            logger.debug("iso_timestamp_parse_failed", text=text)
            return default

    # Currency

    @property
    def currency_code(self) -> str:
        return self.setting.currency_code

    def currency_fraction_digits(self) -> int:
        return babel_numbers.get_currency_precision(self.currency_code)

    def currency_sign(self) -> str:
        return self.setting.currency_symbol

    def number_to_currency_string(self, amount: Numeric, with_symbol: bool = True) -> str:
        """Format an amount in the locale's currency.

        Negative amounts use a leading minus sign rather than accounting
        parentheses. Without the symbol, the amount keeps the currency's
        fraction digits and the locale's separators.
        """
        locale = self.setting.babel_locale
        if with_symbol:
            text = babel_numbers.format_currency(amount, self.currency_code, locale=locale)
        else:
            digits = self.currency_fraction_digits()
            pattern = "#,##0" + ("." + "0" * digits if digits else "")
            text = babel_numbers.format_decimal(amount, format=pattern, locale=locale)
        if text.startswith("(") and text.endswith(")"):
            text = "-" + text[1:-1]
        return text.replace(NARROW_NBSP, NBSP)

    def long_to_currency_string(self, amount: int, with_symbol: bool = True) -> str:
        """Format an amount held in minor units (cents)."""
        digits = self.currency_fraction_digits()
        value = Decimal(amount).scaleb(-digits)
        return self.number_to_currency_string(value, with_symbol)

    def currency_string_to_number(self, text: Optional[str], default: Any = None) -> Any:
        """Parse a currency amount, with or without symbol.

        Returns:
            Decimal amount, or ``default`` when the text is empty or
            unparseable.
        """
        if not text or not text.strip():
            return default

        cleaned = text.strip()
        for token in (self.currency_sign(), self.currency_code):
            if token:
                cleaned = cleaned.replace(token, "")
        cleaned = _WHITESPACE_RE.sub("", cleaned)
        if cleaned.startswith("(") and cleaned.endswith(")"):
            cleaned = "-" + cleaned[1:-1]
        if cleaned.endswith("-"):
            cleaned = "-" + cleaned[:-1]
        return self._parse_decimal(cleaned, text, default)

    def currency_string_to_long(self, text: Optional[str], default: int = 0) -> int:
        """Parse a currency amount into minor units (cents)."""
        value = self.currency_string_to_number(text, None)
        if value is None:
            return default
        digits = self.currency_fraction_digits()
        return int(value.scaleb(digits).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def round_currency(self, amount: Numeric) -> Decimal:
        """Round half-up to the currency's fraction digits."""
        digits = self.currency_fraction_digits()
        return Decimal(str(amount)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)

    def preferred_currency_format(self) -> str:
        """Input hint such as ``#,###.##`` built from the locale's symbols."""
        pattern = self.setting.babel_locale.currency_formats["standard"]
        return self._format_hint(pattern.grouping[0], self.currency_fraction_digits())

    def compress_currency_string(self, text: str) -> str:
        """Drop grouping separators, the currency symbol and HTML entities."""
        for token in (self._group_symbol(), NBSP, NARROW_NBSP, self.currency_sign()):
            if token:
                text = text.replace(token, "")
        return _ENTITY_RE.sub("", text)

    def number_to_compact_currency_string(self, amount: Numeric) -> str:
        return self.compress_currency_string(self.number_to_currency_string(amount, False))

    def long_to_compact_currency_string(self, amount: int) -> str:
        return self.compress_currency_string(self.long_to_currency_string(amount, False))

    # Numbers

    def number_to_string(self, value: Optional[Numeric]) -> str:
        """Format with the locale's grouping and up to three fraction digits."""
        if value is None:
            return "0"
        text = babel_numbers.format_decimal(value, locale=self.setting.babel_locale)
        return text.replace(NBSP, " ").replace(NARROW_NBSP, " ")

    def string_to_number(self, text: Optional[str], default: Any = None) -> Any:
        """Parse a number; spaces are ignored and grouping is optional.

        Returns:
            Decimal value, or ``default`` when the text is empty or
            unparseable.
        """
        if not text or not text.strip():
            return default
        return self._parse_decimal(_WHITESPACE_RE.sub("", text), text, default)

    def preferred_number_format(self, fraction_digits: int = 0) -> str:
        pattern = self.setting.babel_locale.decimal_formats[None]
        return self._format_hint(pattern.grouping[0], fraction_digits)

    def compress_number_string(self, text: str) -> str:
        """Drop grouping separators, HTML entities and spaces."""
        text = self.compress_currency_string(text)
        return _WHITESPACE_RE.sub("", text)

    def number_to_compact_string(self, value: Optional[Numeric]) -> str:
        return self.compress_number_string(self.number_to_string(value))

    # Percentages

    def fractional_number_to_percentage(self, value: Numeric) -> str:
        """Format 0.885 as "88.5%" with at most two fraction digits."""
        percent = (Decimal(str(value)) * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
        if percent == percent.to_integral_value():
            percent = percent.quantize(Decimal(1))
        else:
            percent = percent.normalize()
        text = babel_numbers.format_percent(
            percent / 100,
            locale=self.setting.babel_locale,
            decimal_quantization=False,
        )
        return text.replace(NARROW_NBSP, NBSP)

    def int_to_percentage(self, value: int, fractional_digits: int = 0) -> str:
        """Format an integer percentage carrying ``fractional_digits``
        implied decimals (1234 with 2 digits is 12.34%)."""
        fraction = Decimal(value).scaleb(-(2 + fractional_digits))
        return self.fractional_number_to_percentage(fraction)

    # Helpers

    def _group_symbol(self) -> str:
        return babel_numbers.get_group_symbol(self.setting.babel_locale)

    def _format_hint(self, group_size: int, fraction_digits: int) -> str:
        locale = self.setting.babel_locale
        hint = "#" + babel_numbers.get_group_symbol(locale) + "#" * group_size
        if fraction_digits > 0:
            hint += babel_numbers.get_decimal_symbol(locale) + "#" * fraction_digits
        return hint

    def _parse_decimal(self, cleaned: str, original: str, default: Any) -> Any:
        try:
            return babel_numbers.parse_decimal(
                cleaned.replace(NBSP, "").replace(NARROW_NBSP, ""),
                locale=self.setting.babel_locale,
            )
        except (babel_numbers.NumberFormatError, InvalidOperation, ValueError):
            logger.debug("number_parse_failed", text=original, locale=self.locale)
            return default
