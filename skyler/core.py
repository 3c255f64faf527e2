"""Parser objects, the primitive parsers and the combinators that join them."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from skyler.inputs import Input
from skyler.state import ParseError, State, merge_errors

Fold = Callable[[List[Any]], Any]
Outcome = Tuple[bool, Any]

MAX_DEPTH = 1000


class Kind(IntEnum):
    """What a parser does when it is run."""

    UNDEFINED = 0
    PASS = 1
    FAIL = 2
    LIFT = 3
    LIFT_VAL = 4
    EXPECT = 5
    ANCHOR = 6
    STATE = 7
    ANY = 8
    SINGLE = 9
    ONEOF = 10
    NONEOF = 11
    RANGE = 12
    SATISFY = 13
    STRING = 14
    APPLY = 15
    APPLY_TO = 16
    PREDICT = 17
    NOT = 18
    MAYBE = 19
    MANY = 20
    MANY1 = 21
    COUNT = 22
    OR = 23
    AND = 24
    CHECK = 25
    CHECK_WITH = 26
    SOI = 27
    EOI = 28
    SEPBY1 = 29


@dataclass(eq=False, repr=False)
class Parser:
    """A node of a parser graph.

    ``retained`` parsers are the named ones made by :func:`new`; they can be
    defined after being referenced, which allows recursive grammars.
    Which of the other fields matter depends on ``kind``.
    """

    kind: Kind = Kind.UNDEFINED
    name: Optional[str] = None
    retained: bool = False
    message: str = ""
    chars: str = ""
    lo: str = ""
    hi: str = ""
    func: Optional[Callable[..., Any]] = None
    data: Any = None
    fold: Optional[Fold] = None
    n: int = 0
    inner: Optional[Parser] = None
    sep: Optional[Parser] = None
    parsers: List[Parser] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Parser(kind={self.kind.name}, name={self.name!r})"

    # Running

    def parse(self, filename: str, string: str) -> Any:
        """Parse ``string``; return the result or raise :class:`ParseError`."""
        return self.parse_input(Input.from_string(filename, string))

    def parse_input(self, source: Input) -> Any:
        """Parse from an :class:`Input`; return the result or raise :class:`ParseError`."""
        start = ParseError(source.filename, State.invalid(), (), "Unknown Error", " ")
        run = _Run(source, start)
        with _deep_stack():
            ok, result = run.run(self, 0)
        if ok:
            return result
        raise merge_errors([run.err, result])

    def parse_file(self, filename: str, file: Any) -> Any:
        """Parse from a seekable file object."""
        return self.parse_input(Input.from_file(filename, file))

    def parse_pipe(self, filename: str, pipe: Any) -> Any:
        """Parse from a stream that can only be read forwards."""
        return self.parse_input(Input.from_pipe(filename, pipe))

    def parse_contents(self, filename: str) -> Any:
        """Parse the contents of the file at ``filename``."""
        try:
            fh = open(filename, "rb")
        except OSError as exc:
            raise ParseError.from_file(filename, "Unable to open file!") from exc
        with fh:
            return self.parse_file(filename, fh)

    # Building

    def _assign(self, other: Parser) -> None:
        self.kind = other.kind
        self.message = other.message
        self.chars = other.chars
        self.lo = other.lo
        self.hi = other.hi
        self.func = other.func
        self.data = other.data
        self.fold = other.fold
        self.n = other.n
        self.inner = other.inner
        self.sep = other.sep
        self.parsers = list(other.parsers)

    def define(self, other: Parser) -> Parser:
        """Give this named parser the behaviour of ``other``."""
        source = other if self.retained else fail("Attempt to assign to Unretained Parser!")
        self._assign(source)
        return self

    def undefine(self) -> Parser:
        """Drop the definition, leaving a parser that always fails."""
        self._assign(Parser())
        return self

    def copy(self) -> Parser:
        """A deep copy; named parsers are shared, not copied."""
        if self.retained:
            return self
        dup = Parser(name=self.name)
        dup._assign(self)
        if dup.inner is not None:
            dup.inner = dup.inner.copy()
        if dup.sep is not None:
            dup.sep = dup.sep.copy()
        dup.parsers = [q.copy() for q in dup.parsers]
        return dup


@contextmanager
def _deep_stack() -> Iterator[None]:
    old = sys.getrecursionlimit()
    needed = MAX_DEPTH * 4 + 1000
    if old < needed:
        sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        if old < needed:
            sys.setrecursionlimit(old)


class _Run:
    """One parse in progress: the input and the errors gathered so far."""

    def __init__(self, source: Input, err: Optional[ParseError]) -> None:
        self.source = source
        self.err = err

    def run(self, p: Parser, depth: int) -> Outcome:
        if depth == MAX_DEPTH:
            return False, self.source.failure("Maximum recursion depth exceeded!")
        return _HANDLERS[p.kind](self, p, depth)

    def merge(self, error: Optional[ParseError]) -> None:
        self.err = merge_errors([self.err, error])

    def collect(self, p: Parser, depth: int) -> Tuple[List[Any], Optional[ParseError]]:
        values: List[Any] = []
        while True:
            ok, value = self.run(p, depth)
            if not ok:
                return values, value
            values.append(value)


def _matched(value: Optional[str]) -> Outcome:
    return (True, value) if value is not None else (False, None)


def _apply(r: _Run, p: Parser, d: int) -> Outcome:
    ok, v = r.run(p.inner, d + 1)
    return (True, p.func(v)) if ok else (False, v)


def _apply_to(r: _Run, p: Parser, d: int) -> Outcome:
    ok, v = r.run(p.inner, d + 1)
    return (True, p.func(v, p.data)) if ok else (False, v)


def _check(r: _Run, p: Parser, d: int) -> Outcome:
    ok, v = r.run(p.inner, d + 1)
    if not ok:
        return False, v
    if p.func(v):
        return True, v
    return False, r.source.failure(p.message)


def _check_with(r: _Run, p: Parser, d: int) -> Outcome:
    ok, v = r.run(p.inner, d + 1)
    if not ok:
        return False, v
    if p.func(v, p.data):
        return True, v
    return False, r.source.failure(p.message)


def _expect(r: _Run, p: Parser, d: int) -> Outcome:
    with r.source.suppressed():
        ok, v = r.run(p.inner, d + 1)
    if ok:
        return True, v
    return False, r.source.error(p.message)


def _predict(r: _Run, p: Parser, d: int) -> Outcome:
    with r.source.no_backtrack():
        return r.run(p.inner, d + 1)


def _not(r: _Run, p: Parser, d: int) -> Outcome:
    r.source.mark()
    with r.source.suppressed():
        ok, _ = r.run(p.inner, d + 1)
        if ok:
            r.source.rewind()
        else:
            r.source.unmark()
    if ok:
        return False, r.source.error("opposite")
    return True, p.func()


def _maybe(r: _Run, p: Parser, d: int) -> Outcome:
    ok, v = r.run(p.inner, d + 1)
    if ok:
        return True, v
    r.merge(v)
    return True, p.func()


def _many(r: _Run, p: Parser, d: int) -> Outcome:
    values, error = r.collect(p.inner, d + 1)
    r.merge(error)
    return True, p.fold(values)


def _many1(r: _Run, p: Parser, d: int) -> Outcome:
    values, error = r.collect(p.inner, d + 1)
    if not values:
        return False, error.many1() if error is not None else None
    r.merge(error)
    return True, p.fold(values)


def _sepby1(r: _Run, p: Parser, d: int) -> Outcome:
    values: List[Any] = []
    ok, v = r.run(p.inner, d + 1)
    if ok:
        values.append(v)
        while True:
            ok, v = r.run(p.sep, d + 1)
            if ok:
                ok, v = r.run(p.inner, d + 1)
            if not ok:
                break
            values.append(v)
    if not values:
        return False, v.many1() if v is not None else None
    r.merge(v)
    return True, p.fold(values)


def _count(r: _Run, p: Parser, d: int) -> Outcome:
    values: List[Any] = []
    error: Optional[ParseError] = None
    while True:
        ok, v = r.run(p.inner, d + 1)
        if not ok:
            error = v
            break
        values.append(v)
        if len(values) == p.n:
            break
    if len(values) == p.n:
        return True, p.fold(values)
    return False, error.count(p.n) if error is not None else None


def _or(r: _Run, p: Parser, d: int) -> Outcome:
    if not p.parsers:
        return True, None
    for q in p.parsers:
        ok, v = r.run(q, d + 1)
        if ok:
            return True, v
        r.merge(v)
    return False, None


def _and(r: _Run, p: Parser, d: int) -> Outcome:
    if not p.parsers:
        return True, None
    r.source.mark()
    values: List[Any] = []
    for q in p.parsers:
        ok, v = r.run(q, d + 1)
        if not ok:
            r.source.rewind()
            return False, v
        values.append(v)
    r.source.unmark()
    return True, p.fold(values)


_HANDLERS: Dict[Kind, Callable[[_Run, Parser, int], Outcome]] = {
    Kind.ANY: lambda r, p, d: _matched(r.source.any()),
    Kind.SINGLE: lambda r, p, d: _matched(r.source.char(p.chars)),
    Kind.RANGE: lambda r, p, d: _matched(r.source.range(p.lo, p.hi)),
    Kind.ONEOF: lambda r, p, d: _matched(r.source.one_of(p.chars)),
    Kind.NONEOF: lambda r, p, d: _matched(r.source.none_of(p.chars)),
    Kind.SATISFY: lambda r, p, d: _matched(r.source.satisfy(p.func)),
    Kind.STRING: lambda r, p, d: _matched(r.source.string(p.chars)),
    Kind.ANCHOR: lambda r, p, d: (r.source.anchor(p.func), None),
    Kind.SOI: lambda r, p, d: (r.source.soi(), None),
    Kind.EOI: lambda r, p, d: (r.source.eoi(), None),
    Kind.UNDEFINED: lambda r, p, d: (False, r.source.failure("Parser Undefined!")),
    Kind.PASS: lambda r, p, d: (True, None),
    Kind.FAIL: lambda r, p, d: (False, r.source.failure(p.message)),
    Kind.LIFT: lambda r, p, d: (True, p.func()),
    Kind.LIFT_VAL: lambda r, p, d: (True, p.data),
    Kind.STATE: lambda r, p, d: (True, r.source.state_copy()),
    Kind.APPLY: _apply,
    Kind.APPLY_TO: _apply_to,
    Kind.CHECK: _check,
    Kind.CHECK_WITH: _check_with,
    Kind.EXPECT: _expect,
    Kind.PREDICT: _predict,
    Kind.NOT: _not,
    Kind.MAYBE: _maybe,
    Kind.MANY: _many,
    Kind.MANY1: _many1,
    Kind.SEPBY1: _sepby1,
    Kind.COUNT: _count,
    Kind.OR: _or,
    Kind.AND: _and,
}


def _return_none() -> None:
    return None


# Building parsers


def new(name: str) -> Parser:
    """A named parser, to be given its behaviour later with :meth:`Parser.define`."""
    return Parser(name=name, retained=True)


def cleanup(*parsers: Parser) -> None:
    """Undefine every parser given, breaking any cycles between them."""
    for p in parsers:
        p.undefine()


def pass_() -> Parser:
    """Always succeeds, consuming nothing and producing None."""
    return Parser(Kind.PASS)


def fail(message: str) -> Parser:
    """Always fails with ``message``."""
    return Parser(Kind.FAIL, message=message)


def lift(ctor: Callable[[], Any]) -> Parser:
    """Succeeds with the value returned by ``ctor()``."""
    return Parser(Kind.LIFT, func=ctor)


def lift_val(value: Any) -> Parser:
    """Succeeds with ``value`` itself."""
    return Parser(Kind.LIFT_VAL, data=value)


def anchor(f: Callable[[str, str], Any]) -> Parser:
    """Succeeds, consuming nothing, when ``f(previous, next)`` holds."""
    return expect(Parser(Kind.ANCHOR, func=f), "anchor")


def state() -> Parser:
    """Succeeds with the current :class:`State`."""
    return Parser(Kind.STATE)


def expect(parser: Parser, message: str) -> Parser:
    """On failure, report that ``message`` was expected."""
    return Parser(Kind.EXPECT, inner=parser, message=message)


def any_char() -> Parser:
    return expect(Parser(Kind.ANY), "any character")


def char(c: str) -> Parser:
    return expect(Parser(Kind.SINGLE, chars=c), f"'{c}'")


def range_of(lo: str, hi: str) -> Parser:
    return expect(Parser(Kind.RANGE, lo=lo, hi=hi), f"character between '{lo}' and '{hi}'")


def one_of(chars: str) -> Parser:
    return expect(Parser(Kind.ONEOF, chars=chars), f"one of '{chars}'")


def none_of(chars: str) -> Parser:
    return expect(Parser(Kind.NONEOF, chars=chars), f"none of '{chars}'")


def satisfy(f: Callable[[str], Any]) -> Parser:
    label = getattr(f, "__name__", repr(f))
    return expect(Parser(Kind.SATISFY, func=f), f"character satisfying function {label}")


def string(s: str) -> Parser:
    return expect(Parser(Kind.STRING, chars=s), f'"{s}"')


def apply(parser: Parser, f: Callable[[Any], Any]) -> Parser:
    """Transform the result with ``f``."""
    return Parser(Kind.APPLY, inner=parser, func=f)


def apply_to(parser: Parser, f: Callable[[Any, Any], Any], data: Any) -> Parser:
    """Transform the result with ``f(result, data)``."""
    return Parser(Kind.APPLY_TO, inner=parser, func=f, data=data)


def check(parser: Parser, f: Callable[[Any], Any], message: str) -> Parser:
    """Fail with ``message`` unless ``f(result)`` holds."""
    return Parser(Kind.CHECK, inner=parser, func=f, message=message)


def check_with(parser: Parser, f: Callable[[Any, Any], Any], data: Any, message: str) -> Parser:
    """Fail with ``message`` unless ``f(result, data)`` holds."""
    return Parser(Kind.CHECK_WITH, inner=parser, func=f, data=data, message=message)


def predictive(parser: Parser) -> Parser:
    """Run ``parser`` without backtracking."""
    return Parser(Kind.PREDICT, inner=parser)


def not_(parser: Parser, ctor: Optional[Callable[[], Any]] = None) -> Parser:
    """Succeed, consuming nothing, only where ``parser`` fails."""
    return Parser(Kind.NOT, inner=parser, func=ctor or _return_none)


def maybe(parser: Parser, ctor: Optional[Callable[[], Any]] = None) -> Parser:
    """Run ``parser``; if it fails, succeed with ``ctor()`` instead."""
    return Parser(Kind.MAYBE, inner=parser, func=ctor or _return_none)


def many(fold: Fold, parser: Parser) -> Parser:
    """Zero or more repetitions, folded together."""
    return Parser(Kind.MANY, inner=parser, fold=fold)


def many1(fold: Fold, parser: Parser) -> Parser:
    """One or more repetitions, folded together."""
    return Parser(Kind.MANY1, inner=parser, fold=fold)


def count(n: int, fold: Fold, parser: Parser) -> Parser:
    """Exactly ``n`` repetitions, folded together."""
    return Parser(Kind.COUNT, inner=parser, fold=fold, n=n)


def sepby1(fold: Fold, sep: Parser, parser: Parser) -> Parser:
    """One or more of ``parser`` separated by ``sep``; separators are dropped."""
    return Parser(Kind.SEPBY1, inner=parser, sep=sep, fold=fold)


def or_(*parsers: Parser) -> Parser:
    """The first alternative that succeeds."""
    return Parser(Kind.OR, parsers=list(parsers))


def and_(fold: Fold, *parsers: Parser) -> Parser:
    """All parsers in sequence, their results folded together."""
    return Parser(Kind.AND, parsers=list(parsers), fold=fold)


def soi() -> Parser:
    return expect(Parser(Kind.SOI), "start of input")


def eoi() -> Parser:
    return expect(Parser(Kind.EOI), "end of input")