"""Text transforms applied to translated strings.

- wikified(): a small wiki markup to HTML conversion
- escape_html() / escape_javascript(): escaping for HTML and JavaScript
  string literals
- get_escape_function(): the escape function configured by name
"""

import html
import re
from typing import Callable, Dict

EscapeFunction = Callable[[str], str]

_WIKI_RULES = (
    (re.compile(r"\*\*([^*/_]*)\*\*"), r"<b>\1</b>"),
    (re.compile(r"//([^/*_]*)//"), r"<i>\1</i>"),
    (re.compile(r"__([^*/_]*)__"), r"<u>\1</u>"),
    (re.compile(r"_r_([^*/_]*)_r_"), r'<font color=red>\1</font>'),
    (re.compile(r"_br_"), "<br>"),
    (re.compile(r"\[\[([^|]*)\|([^]]*)\]\]"), r'<a href="\1">\2</a>'),
)

_JS_ESCAPES = {
    "'": "\\'",
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\n": "\\n",
    "\t": "\\t",
    "\f": "\\f",
    "\r": "\\r",
}


def wikified(msg: str) -> str:
    """Convert wiki markup to HTML.

    Supported markup (modifiers cannot be nested):
        **bold**, //italic//, __underline__, _r_red text_r_, _br_ (line
        break) and [[url|link text]].

    Args:
        msg: Text with wiki markup.

    Returns:
        Text with the markup replaced by HTML tags.
    """
    for pattern, replacement in _WIKI_RULES:
        msg = pattern.sub(replacement, msg)
    return msg


def no_escape(s: str) -> str:
    return s


def escape_html(s: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for HTML. Apostrophes are kept."""
    return html.escape(s, quote=False).replace('"', "&quot;")


def escape_javascript(s: str) -> str:
    """Escape text for a JavaScript string literal.

    Quotes, backslashes and ``/`` are backslash-escaped, control characters
    use their short escapes, and every non-ASCII character becomes an
    upper-case ``\\uXXXX`` escape.
    """
    out = []
    for ch in s:
        if ch in _JS_ESCAPES:
            out.append(_JS_ESCAPES[ch])
        elif ord(ch) > 0x7F or ord(ch) < 0x20:
            if ord(ch) > 0xFFFF:
                # Astral characters become a UTF-16 surrogate pair.
                encoded = ch.encode("utf-16-be")
                for i in range(0, len(encoded), 2):
                    out.append("\\u%04X" % int.from_bytes(encoded[i : i + 2], "big"))
            else:
                out.append("\\u%04X" % ord(ch))
        else:
            out.append(ch)
    return "".join(out)


ESCAPE_FUNCTIONS: Dict[str, EscapeFunction] = {
    "none": no_escape,
    "html": escape_html,
}


def get_escape_function(name: str) -> EscapeFunction:
    """Return the escape function registered under ``name``.

    Raises:
        ValueError: If no escape function has that name.
    """
    try:
        return ESCAPE_FUNCTIONS[name.lower()]
    except KeyError as e:
        raise ValueError(f"Unsupported escape function: {name}") from e
