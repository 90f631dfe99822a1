"""Placeholder formatting for translated messages.

Messages use numbered placeholders with optional types::

    "There are {0,number} {1} in the tree, worth {2,number,currency}."
    "Saved on {0,date,short} at {0,time,short}."

Apostrophes are special: ``''`` is a literal apostrophe and text between
single apostrophes is copied verbatim, so ``'{'`` is a literal brace.
A placeholder whose argument was not supplied is left in the output as-is.
"""

from datetime import date, datetime, time
from decimal import Decimal
from functools import lru_cache
from numbers import Number
from typing import Any, List, Optional, Sequence, Tuple, Union

from babel import numbers as babel_numbers

from localekit.i18n.formats import DateFormat, babel_locale
from localekit.i18n.models import FULL, LONG, MEDIUM, SHORT

_STYLE_IDS = {"short": SHORT, "medium": MEDIUM, "long": LONG, "full": FULL}

Segment = Union[str, Tuple[int, str, str, str]]


class MessageFormatError(ValueError):
    """Raised for a malformed message pattern."""


def _read_placeholder(pattern: str, start: int) -> Tuple[str, int]:
    """Return the raw text between ``{`` at ``start`` and its closing brace."""
    depth = 0
    i = start
    in_quote = False
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            in_quote = not in_quote
        elif not in_quote:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pattern[start + 1 : i], i + 1
        i += 1
    raise MessageFormatError(f"Unmatched braces in message pattern: {pattern!r}")


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Tuple[Segment, ...]:
    """Split a message pattern into literal strings and placeholders.

    Placeholders are ``(index, type, style, raw)`` tuples.

    Raises:
        MessageFormatError: For unbalanced braces or a non-numeric index.
    """
    segments: List[Segment] = []
    literal: List[str] = []
    i = 0
    n = len(pattern)
    in_quote = False
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            in_quote = not in_quote
            i += 1
            continue
        if in_quote:
            literal.append(ch)
            i += 1
            continue
        if ch == "{":
            body, i = _read_placeholder(pattern, i)
            parts = [p.strip() for p in body.split(",", 2)]
            try:
                index = int(parts[0])
            except ValueError as e:
                raise MessageFormatError(
                    f"Invalid argument index {parts[0]!r} in {pattern!r}"
                ) from e
            if literal:
                segments.append("".join(literal))
                literal = []
            kind = parts[1].lower() if len(parts) > 1 else ""
            style = parts[2] if len(parts) > 2 else ""
            segments.append((index, kind, style, "{" + body + "}"))
            continue
        literal.append(ch)
        i += 1
    if literal:
        segments.append("".join(literal))
    return tuple(segments)


class MessageFormatter:
    """Formats message patterns for one locale.

    Attributes:
        locale: Normalized locale string.
        currency_code: ISO 4217 code used by ``{n,number,currency}``.
    """

    def __init__(self, locale: str, currency_code: Optional[str] = None):
        self.locale = locale
        self.currency_code = currency_code or "USD"
        self._babel_locale = babel_locale(locale)

    def format(self, pattern: str, *args: Any) -> str:
        """Substitute ``args`` into ``pattern``.

        Args:
            pattern: Message pattern.
            *args: Positional arguments for ``{0}``, ``{1}``, ...

        Returns:
            The formatted message.
        """
        out = []
        for segment in compile_pattern(pattern):
            if isinstance(segment, str):
                out.append(segment)
                continue
            index, kind, style, raw = segment
            if index >= len(args):
                out.append(raw)
                continue
            out.append(self._format_argument(args[index], kind, style))
        return "".join(out)

    def format_sequence(self, pattern: str, args: Sequence[Any]) -> str:
        return self.format(pattern, *args)

    def _format_argument(self, value: Any, kind: str, style: str) -> str:
        if value is None:
            return "null"
        if kind == "number":
            return self._format_number(value, style)
        if kind in ("date", "time"):
            return self._format_date(value, kind, style)
        if kind:
            raise MessageFormatError(f"Unsupported format type: {kind}")

        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (Number, Decimal)):
            return self._format_number(value, "")
        if isinstance(value, datetime):
            return f"{self._format_date(value, 'date', 'short')} {self._format_date(value, 'time', 'short')}"
        if isinstance(value, date):
            return self._format_date(value, "date", "short")
        return str(value)

    def _format_number(self, value: Any, style: str) -> str:
        locale = self._babel_locale
        lowered = style.lower()
        if lowered == "":
            return babel_numbers.format_decimal(value, locale=locale)
        if lowered == "integer":
            return babel_numbers.format_decimal(value, format="#,##0", locale=locale)
        if lowered == "currency":
            return babel_numbers.format_currency(value, self.currency_code, locale=locale)
        if lowered == "percent":
            return babel_numbers.format_percent(value, locale=locale)
        return babel_numbers.format_decimal(value, format=style, locale=locale)

    def _format_date(self, value: Any, kind: str, style: str) -> str:
        if not isinstance(value, (date, time)):
            raise MessageFormatError(f"Cannot format {type(value).__name__} as a {kind}")
        lowered = style.lower() or "medium"
        if lowered in _STYLE_IDS:
            if kind == "date":
                fmt = DateFormat.for_style(_STYLE_IDS[lowered], self.locale)
            else:
                fmt = DateFormat.for_time_style(_STYLE_IDS[lowered], self.locale)
        else:
            fmt = DateFormat(style, self.locale)
        return fmt.format(value)
