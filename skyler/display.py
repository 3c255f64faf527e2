"""Printable descriptions and size statistics of parser graphs."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from skyler.core import Kind, Parser
from skyler.folds import escape

_SYMBOLS = {
    Kind.UNDEFINED: "<?>",
    Kind.PASS: "<:>",
    Kind.FAIL: "<!>",
    Kind.LIFT: "<#>",
    Kind.STATE: "<S>",
    Kind.ANCHOR: "<@>",
    Kind.ANY: "<.>",
    Kind.SATISFY: "<f>",
}

_SUFFIXES = {
    Kind.NOT: "!",
    Kind.MAYBE: "?",
    Kind.MANY: "*",
    Kind.MANY1: "+",
    Kind.CHECK: "->?",
    Kind.CHECK_WITH: "->?",
}

_WRAPPERS = (Kind.APPLY, Kind.APPLY_TO, Kind.PREDICT)

_SINGLE_CHILD = (
    Kind.EXPECT,
    Kind.APPLY,
    Kind.APPLY_TO,
    Kind.PREDICT,
    Kind.CHECK,
    Kind.CHECK_WITH,
    Kind.NOT,
    Kind.MAYBE,
    Kind.MANY,
    Kind.MANY1,
    Kind.COUNT,
)


def _render(p: Parser, force: bool, out: List[str]) -> None:
    if p.retained and not force:
        out.append(f"<{p.name}>" if p.name else "<anon>")
        return

    kind = p.kind
    if kind in _SYMBOLS:
        out.append(_SYMBOLS[kind])
    elif kind is Kind.EXPECT:
        out.append(p.message)
    elif kind is Kind.SINGLE:
        out.append(f"'{escape(p.chars)}'")
    elif kind is Kind.RANGE:
        out.append(f"[{escape(p.lo)}-{escape(p.hi)}]")
    elif kind is Kind.ONEOF:
        out.append(f"[{escape(p.chars)}]")
    elif kind is Kind.NONEOF:
        out.append(f"[^{escape(p.chars)}]")
    elif kind is Kind.STRING:
        out.append(f'"{escape(p.chars)}"')
    elif kind in _WRAPPERS:
        _render(p.inner, False, out)
    elif kind in _SUFFIXES:
        _render(p.inner, False, out)
        out.append(_SUFFIXES[kind])
    elif kind is Kind.COUNT:
        _render(p.inner, False, out)
        out.append(f"{{{p.n}}}")
    elif kind is Kind.SEPBY1:
        _render(p.inner, False, out)
        out.append(" (")
        _render(p.sep, False, out)
        out.append(" ")
        _render(p.inner, False, out)
        out.append(")*")
    elif kind in (Kind.OR, Kind.AND):
        joiner = " | " if kind is Kind.OR else " "
        out.append("(")
        for index, q in enumerate(p.parsers):
            if index:
                out.append(joiner)
            _render(q, False, out)
        out.append(")")


def render(parser: Parser) -> str:
    """A one-line description of ``parser``; named sub-parsers appear as ``<name>``."""
    out: List[str] = []
    _render(parser, True, out)
    return "".join(out)


def print_parser(parser: Parser, stream: Optional[TextIO] = None) -> None:
    """Write the description of ``parser`` and a newline to ``stream``."""
    (stream if stream is not None else sys.stdout).write(render(parser) + "\n")


def _count(p: Parser, force: bool) -> int:
    if p.retained and not force:
        return 0
    if p.kind in _SINGLE_CHILD:
        return 1 + _count(p.inner, False)
    if p.kind is Kind.SEPBY1:
        return 1 + 2 * _count(p.inner, False) + _count(p.sep, False)
    if p.kind in (Kind.OR, Kind.AND):
        return 1 + sum(_count(q, False) for q in p.parsers)
    return 1


def node_count(parser: Parser) -> int:
    """How many nodes make up ``parser``, not descending into named parsers."""
    return _count(parser, True)


def stats(parser: Parser, stream: Optional[TextIO] = None) -> None:
    """Write a short statistics report about ``parser`` to ``stream``."""
    out = stream if stream is not None else sys.stdout
    out.write("Stats\n")
    out.write("=====\n")
    out.write(f"Node Count: {node_count(parser)}\n")