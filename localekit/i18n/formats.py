"""Locale-aware date format objects.

A DateFormat pairs an LDML pattern (``dd/MM/yyyy``, ``MMM d, y h:mm a``) with
a locale. Formatting is delegated to Babel; parsing compiles the pattern
into a regular expression that understands the locale's month, weekday and
day-period names.

DateFormat instances are mutable (callers may change the pattern or the
lenient flag), so anything that hands them out from shared state must return
``copy()``.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple, Union

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel import dates as babel_dates

from localekit.i18n.models import BUILTIN_STYLES, ISO_DATE_PATTERN, normalize_locale

DateLike = Union[date, datetime, time]

_TWO_DIGIT_YEAR_SPAN_BACK = 80


def babel_locale(locale: str, default: str = "en_US") -> BabelLocale:
    """Return the Babel locale for ``locale``, falling back to its language
    and then to ``default`` when CLDR has no data for it."""
    normalized = normalize_locale(locale, default=default)
    for candidate in (normalized, normalized.split("_", 1)[0], default):
        try:
            return BabelLocale.parse(candidate)
        except (UnknownLocaleError, ValueError):
            continue
    return BabelLocale.parse("en_US")


def tokenize_pattern(pattern: str) -> List[Tuple[str, str]]:
    """Split an LDML pattern into ``("field", "yyyy")`` and
    ``("literal", "/")`` tokens.

    Text inside single quotes is literal and ``''`` is an apostrophe.
    """
    tokens: List[Tuple[str, str]] = []
    i = 0
    literal = []
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            end = i + 1
            while end < n:
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            if literal:
                tokens.append(("literal", "".join(literal)))
                literal = []
            end = i
            while end < n and pattern[end] == ch:
                end += 1
            tokens.append(("field", pattern[i:end]))
            i = end
        else:
            literal.append(ch)
            i += 1
    if literal:
        tokens.append(("literal", "".join(literal)))
    return tokens


def _alternation(names: List[str]) -> str:
    unique = sorted({n for n in names if n}, key=len, reverse=True)
    return "|".join(re.escape(n) for n in unique)


def _name_lookup(names: Dict[int, str]) -> Dict[str, int]:
    lookup: Dict[str, int] = {}
    for key, name in names.items():
        lookup[name.lower()] = key
        stripped = name.rstrip(".")
        if stripped:
            lookup.setdefault(stripped.lower(), key)
    return lookup


def expand_two_digit_year(value: int, now: Optional[datetime] = None) -> int:
    """Place a two-digit year within 80 years before and 20 after ``now``."""
    now = now or datetime.now()
    start = now.year - _TWO_DIGIT_YEAR_SPAN_BACK
    year = (start // 100) * 100 + value
    if year < start:
        year += 100
    return year


class _CompiledPattern:
    """Regex plus per-group converters for one (pattern, locale) pair."""

    NUMERIC_FIELDS = set("yMLdHhKkmsS")

    def __init__(self, pattern: str, locale: BabelLocale):
        self.pattern = pattern
        self.locale = locale
        self.converters: List[Tuple[str, Callable[[str], object]]] = []
        self.regex = re.compile(self._build(), re.IGNORECASE)

    def _build(self) -> str:
        tokens = tokenize_pattern(self.pattern)
        parts = []
        for index, (kind, value) in enumerate(tokens):
            if kind == "literal":
                parts.append(self._literal(value))
                continue
            next_numeric = (
                index + 1 < len(tokens)
                and tokens[index + 1][0] == "field"
                and tokens[index + 1][1][0] in self.NUMERIC_FIELDS
            )
            parts.append(self._field(value, next_numeric))
        return "".join(parts)

    @staticmethod
    def _literal(text: str) -> str:
        out = []
        for ch in text:
            if ch.isspace():
                out.append(r"\s*")
            else:
                out.append(re.escape(ch))
        return "".join(out)

    def _digits(self, count: int, max_width: int, fixed: bool) -> str:
        if fixed:
            return r"(\d{%d})" % max(count, 1)
        return r"(\d{1,%d})" % max(count, max_width)

    def _field(self, field: str, next_numeric: bool) -> str:
        letter, count = field[0], len(field)

        if letter in "yu":
            self.converters.append(("year2", str) if count <= 2 else ("year", int))
            return self._digits(count, 4, next_numeric)

        if letter in "ML":
            if count <= 2:
                self.converters.append(("month", int))
                return self._digits(count, 2, next_numeric)
            context = "format" if letter == "M" else "stand-alone"
            names = {}
            names.update(babel_dates.get_month_names("abbreviated", context, self.locale))
            lookup = _name_lookup(names)
            wide = babel_dates.get_month_names("wide", context, self.locale)
            lookup.update(_name_lookup(wide))
            self.converters.append(("month", lambda s, lk=lookup: lk[s.lower()]))
            return "(" + _alternation(list(lookup)) + ")"

        if letter == "d":
            self.converters.append(("day", int))
            return self._digits(count, 2, next_numeric)

        if letter in "Eec":
            if letter in "ec" and count <= 2:
                self.converters.append(("ignore", str))
                return r"(\d)"
            lookup = _name_lookup(
                dict(babel_dates.get_day_names("abbreviated", "format", self.locale))
            )
            lookup.update(_name_lookup(babel_dates.get_day_names("wide", "format", self.locale)))
            self.converters.append(("ignore", str))
            return "(" + _alternation(list(lookup)) + ")"

        if letter in "HhKk":
            self.converters.append(({"H": "hour", "h": "hour12", "K": "hour11", "k": "hour24"}[letter], int))
            return self._digits(count, 2, next_numeric)

        if letter == "m":
            self.converters.append(("minute", int))
            return self._digits(count, 2, next_numeric)

        if letter == "s":
            self.converters.append(("second", int))
            return self._digits(count, 2, next_numeric)

        if letter == "S":
            self.converters.append(("fraction", str))
            return r"(\d{%d})" % count if next_numeric else r"(\d{1,9})"

        if letter == "a":
            periods = self.locale.day_periods.get("format", {}).get("abbreviated", {})
            lookup = {"am": "am", "pm": "pm", "a.m.": "am", "p.m.": "pm"}
            for key in ("am", "pm"):
                if key in periods:
                    lookup[periods[key].lower()] = key
            self.converters.append(("period", lambda s, lk=lookup: lk[s.lower()]))
            return "(" + _alternation(list(lookup)) + ")"

        if letter == "G":
            eras = self.locale.eras.get("abbreviated", {})
            self.converters.append(("ignore", str))
            return "(" + _alternation(list(eras.values()) + ["AD", "BC"]) + ")"

        if letter in "ZXx":
            self.converters.append(("offset", str))
            return r"(Z|GMT|UTC|[+-]\d{2}(?::?\d{2})?|GMT[+-]\d{1,2}(?::?\d{2})?)"

        if letter in "zvV":
            self.converters.append(("ignore", str))
            return r"([A-Za-z_/]+(?:[+-]\d{1,2}(?::?\d{2})?)?)"

        raise ValueError(f"Unsupported date pattern field {field!r} in {self.pattern!r}")

    def match(self, text: str) -> Dict[str, object]:
        found = self.regex.fullmatch(text.strip())
        if found is None:
            raise ValueError(f"Unparseable date: {text!r} does not match {self.pattern!r}")
        fields: Dict[str, object] = {}
        for (name, convert), raw in zip(self.converters, found.groups()):
            if name == "ignore":
                continue
            fields[name] = convert(raw)
        return fields


def _parse_offset(raw: str) -> Optional[timezone]:
    value = raw.upper().replace("GMT", "").replace("UTC", "")
    if value in ("", "Z"):
        return timezone.utc
    sign = -1 if value[0] == "-" else 1
    digits = value[1:].replace(":", "")
    hours = int(digits[:2]) if len(digits) >= 2 else int(digits)
    minutes = int(digits[2:4]) if len(digits) >= 4 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


class DateFormat:
    """A mutable date/time pattern bound to a locale.

    Attributes:
        pattern: LDML pattern string.
        locale: Normalized locale string.
        lenient: When True, out-of-range fields roll over (day 32 of
            January becomes February 1st) instead of failing.
    """

    def __init__(self, pattern: str, locale: str = "en_US", lenient: bool = False):
        self.pattern = pattern
        self.locale = normalize_locale(locale)
        self.lenient = lenient

    @classmethod
    def for_style(cls, style_id: int, locale: str) -> "DateFormat":
        """Return the locale's standard date format for a built-in style id.

        Args:
            style_id: One of FULL, LONG, MEDIUM, SHORT.
            locale: Locale string.

        Returns:
            A new DateFormat carrying the CLDR pattern.
        """
        style = BUILTIN_STYLES[style_id]
        pattern = babel_dates.get_date_format(style, locale=babel_locale(locale)).pattern
        return cls(pattern, locale)

    @classmethod
    def for_time_style(cls, style_id: int, locale: str) -> "DateFormat":
        """Return the locale's standard time format for a built-in style id."""
        style = BUILTIN_STYLES[style_id]
        pattern = babel_dates.get_time_format(style, locale=babel_locale(locale)).pattern
        return cls(pattern, locale)

    @classmethod
    def iso(cls, locale: str) -> "DateFormat":
        return cls(ISO_DATE_PATTERN, locale)

    def copy(self) -> "DateFormat":
        """Return an independent copy of this format."""
        return DateFormat(self.pattern, self.locale, self.lenient)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DateFormat):
            return NotImplemented
        return (
            self.pattern == other.pattern
            and self.locale == other.locale
            and self.lenient == other.lenient
        )

    def __hash__(self):
        return hash((self.pattern, self.locale, self.lenient))

    def __repr__(self) -> str:
        return f"DateFormat({self.pattern!r}, {self.locale!r}, lenient={self.lenient})"

    def format(self, value: DateLike) -> str:
        """Format a date, datetime or time with this pattern.

        Aware datetimes are rendered in their own timezone; naive values are
        rendered as-is.
        """
        if isinstance(value, datetime):
            moment = value
        elif isinstance(value, date):
            moment = datetime.combine(value, time.min)
        elif isinstance(value, time):
            moment = datetime.combine(date(1970, 1, 1), value)
        else:
            raise TypeError(f"Cannot format {type(value).__name__} as a date")

        tzinfo = moment.tzinfo
        text = babel_dates.format_datetime(
            moment,
            format=self.pattern,
            tzinfo=tzinfo,
            locale=babel_locale(self.locale),
        )
        return text.replace("\u202f", " ")

    def parse(self, text: str) -> datetime:
        """Parse text produced with this pattern (or typed by a user).

        Fields missing from the pattern default to 1970-01-01 00:00:00.
        Two-digit years are placed within 80 years before and 20 years
        after today.

        Args:
            text: Text to parse.

        Returns:
            Parsed datetime (aware only when the pattern has an offset field).

        Raises:
            ValueError: If the text does not match or a field is out of range.
        """
        if text is None:
            raise ValueError("Unparseable date: None")
        compiled = _CompiledPattern(self.pattern, babel_locale(self.locale))
        fields = compiled.match(text)

        year = fields.get("year", 1970)
        if "year2" in fields:
            raw = fields["year2"]
            year = expand_two_digit_year(int(raw)) if len(raw) == 2 else int(raw)
        month = fields.get("month", 1)
        day = fields.get("day", 1)

        hour = fields.get("hour", 0)
        if "hour24" in fields:
            hour = fields["hour24"] % 24
        if "hour12" in fields:
            hour = fields["hour12"] % 12
        if "hour11" in fields:
            hour = fields["hour11"]
        if fields.get("period") == "pm" and hour < 12:
            hour += 12
        minute = fields.get("minute", 0)
        second = fields.get("second", 0)
        microsecond = 0
        if "fraction" in fields:
            microsecond = int(str(fields["fraction"]).ljust(6, "0")[:6])

        tzinfo = _parse_offset(fields["offset"]) if "offset" in fields else None

        if self.lenient:
            year += (month - 1) // 12
            month = (month - 1) % 12 + 1
            result = datetime(year, month, 1, tzinfo=tzinfo) + timedelta(
                days=day - 1,
                hours=hour,
                minutes=minute,
                seconds=second,
                microseconds=microsecond,
            )
            return result

        if "period" in fields and ("hour12" in fields or "hour11" in fields):
            raw_hour = fields.get("hour12", fields.get("hour11"))
            if raw_hour > 12:
                raise ValueError(f"Hour out of range in {text!r}")
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tzinfo)
