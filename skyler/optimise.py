"""Simplification of parser graphs by flattening nested alternatives and sequences."""

from __future__ import annotations

from skyler.core import Kind, Parser
from skyler.folds import ctor_str, strfold
from skyler.tree import fold_ast

_SINGLE_CHILD = (
    Kind.EXPECT,
    Kind.APPLY,
    Kind.APPLY_TO,
    Kind.CHECK,
    Kind.CHECK_WITH,
    Kind.PREDICT,
    Kind.NOT,
    Kind.MAYBE,
    Kind.MANY,
    Kind.MANY1,
    Kind.COUNT,
)


def _splice_last(p: Parser, t: Parser) -> None:
    p.parsers = p.parsers[:-1] + t.parsers


def _splice_first(p: Parser, t: Parser) -> None:
    p.parsers = t.parsers + p.parsers[1:]


def _become(p: Parser, t: Parser) -> None:
    p._assign(t)
    p.name = t.name
    p.retained = t.retained


def _is_free(q: Parser, kind: Kind) -> bool:
    return q.kind is kind and not q.retained


def _merge_sequence(p: Parser, fold) -> bool:
    if p.kind is not Kind.AND or p.fold is not fold or not p.parsers:
        return False
    first = p.parsers[0]
    if _is_free(first, Kind.AND) and first.fold is fold:
        _splice_first(p, first)
        return True
    last = p.parsers[-1]
    if _is_free(last, Kind.AND) and last.fold is fold:
        _splice_last(p, last)
        return True
    return False


def _step(p: Parser) -> bool:
    if p.kind is Kind.OR and p.parsers:
        if _is_free(p.parsers[-1], Kind.OR):
            _splice_last(p, p.parsers[-1])
            return True
        if _is_free(p.parsers[0], Kind.OR):
            _splice_first(p, p.parsers[0])
            return True

    if (
        p.kind is Kind.AND
        and len(p.parsers) == 2
        and _is_free(p.parsers[0], Kind.PASS)
        and p.fold is fold_ast
    ):
        _become(p, p.parsers[1])
        return True

    if p.kind is Kind.AND and p.fold is fold_ast and p.parsers:
        first = p.parsers[0]
        if _is_free(first, Kind.AND) and first.fold is fold_ast:
            _splice_first(p, first)
            return True
        last = p.parsers[-1]
        if _is_free(last, Kind.AND) and last.fold is fold_ast:
            _splice_last(p, last)
            return True

    if (
        p.kind is Kind.AND
        and len(p.parsers) == 2
        and _is_free(p.parsers[0], Kind.LIFT)
        and p.parsers[0].func is ctor_str
        and p.fold is strfold
    ):
        _become(p, p.parsers[1])
        return True

    return _merge_sequence(p, strfold)


def _optimise(p: Parser, force: bool) -> None:
    if p.retained and not force:
        return

    if p.kind in _SINGLE_CHILD and p.inner is not None:
        _optimise(p.inner, False)
    elif p.kind is Kind.SEPBY1:
        _optimise(p.inner, False)
        _optimise(p.sep, False)
    elif p.kind in (Kind.OR, Kind.AND):
        for q in p.parsers:
            _optimise(q, False)

    while _step(p):
        pass


def optimise(parser: Parser) -> None:
    """Flatten ``parser`` in place without changing what it accepts or returns.

    Named sub-parsers are left alone; ``parser`` itself is optimised even if named.
    """
    _optimise(parser, True)