"""Ready-made constructors, transforms and folds for parser results."""

from __future__ import annotations

import re
from itertools import takewhile
from typing import Any, List, Optional, Sequence, Tuple

_SPACE = " \t\n\v\f\r"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_FLOAT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def ctor_null() -> None:
    return None


def ctor_str() -> str:
    return ""


def discard(x: Any) -> None:
    """Throw the value away."""
    return None


def _strtol(text: str, base: int) -> int:
    s = text.lstrip(_SPACE)
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    allowed = _DIGITS[:base]
    if base == 16 and s[:2].lower() == "0x" and s[2:3].lower() in allowed and s[2:3]:
        s = s[2:]
    digits = "".join(takewhile(lambda c: c.lower() in allowed, s))
    return sign * int(digits, base) if digits else 0


def to_int(x: str) -> int:
    """The leading decimal integer of ``x``, or 0."""
    return _strtol(x, 10)


def to_hex(x: str) -> int:
    """The leading hexadecimal integer of ``x``, or 0."""
    return _strtol(x, 16)


def to_oct(x: str) -> int:
    """The leading octal integer of ``x``, or 0."""
    return _strtol(x, 8)


def to_float(x: str) -> float:
    """The leading floating point number of ``x``, or 0.0."""
    m = _FLOAT.match(x.lstrip(_SPACE))
    return float(m.group()) if m else 0.0


def strtriml(x: str) -> str:
    return x.lstrip(_SPACE)


def strtrimr(x: str) -> str:
    return x.rstrip(_SPACE)


def strtrim(x: str) -> str:
    return strtriml(strtrimr(x))


_C_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("\a", "\\a"),
    ("\b", "\\b"),
    ("\f", "\\f"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\v", "\\v"),
    ("\\", "\\\\"),
    ("'", "\\'"),
    ('"', '\\"'),
    ("\0", "\\0"),
)
_REGEX_ESCAPES = (("/", "\\/"),)
_STRING_ESCAPES = (('"', '\\"'),)
_CHAR_ESCAPES = (("'", "\\'"),)


def _escape(x: str, table: Sequence[Tuple[str, str]]) -> str:
    mapping = dict(table)
    return "".join(mapping.get(c, c) for c in x)


def _unescape(x: str, table: Sequence[Tuple[str, str]]) -> str:
    out: List[str] = []
    i = 0
    while i < len(x):
        for raw, esc in table:
            if x.startswith(esc, i):
                out.append(raw)
                i += len(esc)
                break
        else:
            out.append(x[i])
            i += 1
    return "".join(out)


def escape(x: str) -> str:
    return _escape(x, _C_ESCAPES)


def unescape(x: str) -> str:
    return _unescape(x, _C_ESCAPES)


def escape_regex(x: str) -> str:
    return _escape(x, _REGEX_ESCAPES)


def unescape_regex(x: str) -> str:
    return _unescape(x, _REGEX_ESCAPES)


def escape_string_raw(x: str) -> str:
    return _escape(x, _STRING_ESCAPES)


def unescape_string_raw(x: str) -> str:
    return _unescape(x, _STRING_ESCAPES)


def escape_char_raw(x: str) -> str:
    return _escape(x, _CHAR_ESCAPES)


def unescape_char_raw(x: str) -> str:
    return _unescape(x, _CHAR_ESCAPES)


def fold_null(xs: Sequence[Any]) -> None:
    return None


def fst(xs: Sequence[Any]) -> Any:
    return xs[0]


def snd(xs: Sequence[Any]) -> Any:
    return xs[1]


def trd(xs: Sequence[Any]) -> Any:
    return xs[2]


def strfold(xs: Sequence[Optional[str]]) -> str:
    """Concatenate string results."""
    return "".join(x for x in xs if x is not None)