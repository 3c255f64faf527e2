"""Common parsers built from the primitives: characters, numbers, literals, tokens."""

from __future__ import annotations

from skyler import folds
from skyler.core import (
    Parser,
    and_,
    anchor,
    any_char,
    apply,
    char,
    eoi,
    expect,
    many,
    many1,
    maybe,
    none_of,
    one_of,
    or_,
    soi,
    string,
)

_LOWER = "abcdefghijklmnopqrstuvwxyz"
_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_DIGITS = "0123456789"
_WORD = _LOWER + _UPPER + _DIGITS + "_"
_SPACES = " \f\n\r\t\v"


def _in_word(c: str) -> bool:
    # The end of the input ("") counts as a word character, as a terminator would.
    return c == "" or c in _WORD


def _boundary_anchor(prev: str, nxt: str) -> bool:
    if _in_word(nxt) and prev == "":
        return True
    if _in_word(prev) and nxt == "":
        return True
    if _in_word(nxt) and not _in_word(prev):
        return True
    if not _in_word(nxt) and _in_word(prev):
        return True
    return False


def _newline_anchor(prev: str, nxt: str) -> bool:
    return prev == "\n"


def boundary() -> Parser:
    """Matches, consuming nothing, at the edge of a word."""
    return expect(anchor(_boundary_anchor), "word boundary")


def boundary_newline() -> Parser:
    """Matches, consuming nothing, just after a newline."""
    return expect(anchor(_newline_anchor), "start of newline")


def whitespace() -> Parser:
    return expect(one_of(_SPACES), "whitespace")


def whitespaces() -> Parser:
    return expect(many(folds.strfold, whitespace()), "spaces")


def blank() -> Parser:
    """Skips any whitespace, producing None."""
    return expect(apply(whitespaces(), folds.discard), "whitespace")


def newline() -> Parser:
    return expect(char("\n"), "newline")


def tab() -> Parser:
    return expect(char("\t"), "tab")


def escape() -> Parser:
    """A backslash and the character after it."""
    return and_(folds.strfold, char("\\"), any_char())


def digit() -> Parser:
    return expect(one_of(_DIGITS), "digit")


def hexdigit() -> Parser:
    return expect(one_of("0123456789ABCDEFabcdef"), "hex digit")


def octdigit() -> Parser:
    return expect(one_of("01234567"), "oct digit")


def digits() -> Parser:
    return expect(many1(folds.strfold, digit()), "digits")


def hexdigits() -> Parser:
    return expect(many1(folds.strfold, hexdigit()), "hex digits")


def octdigits() -> Parser:
    return expect(many1(folds.strfold, octdigit()), "oct digits")


def lower() -> Parser:
    return expect(one_of(_LOWER), "lowercase letter")


def upper() -> Parser:
    return expect(one_of(_UPPER), "uppercase letter")


def alpha() -> Parser:
    return expect(one_of(_LOWER + _UPPER), "letter")


def underscore() -> Parser:
    return expect(char("_"), "underscore")


def alphanum() -> Parser:
    return expect(or_(alpha(), digit(), underscore()), "alphanumeric")


def integer() -> Parser:
    return expect(apply(digits(), folds.to_int), "integer")


def hexadecimal() -> Parser:
    return expect(apply(hexdigits(), folds.to_hex), "hexadecimal")


def octal() -> Parser:
    return expect(apply(octdigits(), folds.to_oct), "octadecimal")


def number() -> Parser:
    return expect(or_(integer(), hexadecimal(), octal()), "number")


def real() -> Parser:
    """The text of a real number: ``[+-]?\\d+(\\.\\d+)?([eE][+-]?[0-9]+)?``."""
    sign = maybe(one_of("+-"), folds.ctor_str)
    whole_part = digits()
    fraction = maybe(and_(folds.strfold, char("."), digits()), folds.ctor_str)
    exponent = maybe(
        and_(
            folds.strfold,
            one_of("eE"),
            maybe(one_of("+-"), folds.ctor_str),
            digits(),
        ),
        folds.ctor_str,
    )
    return expect(and_(folds.strfold, sign, whole_part, fraction, exponent), "real")


def float_() -> Parser:
    return expect(apply(real(), folds.to_float), "float")


def char_lit() -> Parser:
    return expect(between(or_(escape(), any_char()), "'", "'"), "char")


def string_lit() -> Parser:
    strchar = or_(escape(), none_of('"'))
    return expect(between(many(folds.strfold, strchar), '"', '"'), "string")


def regex_lit() -> Parser:
    regexchar = or_(escape(), none_of("/"))
    return expect(between(many(folds.strfold, regexchar), "/", "/"), "regex")


def ident() -> Parser:
    first = or_(alpha(), underscore())
    rest = many(folds.strfold, alphanum())
    return and_(folds.strfold, first, rest)


def startwith(parser: Parser) -> Parser:
    """``parser`` only at the start of the input."""
    return and_(folds.snd, soi(), parser)


def endwith(parser: Parser) -> Parser:
    """``parser`` followed by the end of the input."""
    return and_(folds.fst, parser, eoi())


def whole(parser: Parser) -> Parser:
    """``parser`` covering the whole input."""
    return and_(folds.snd, soi(), parser, eoi())


def stripl(parser: Parser) -> Parser:
    return and_(folds.snd, blank(), parser)


def stripr(parser: Parser) -> Parser:
    return and_(folds.fst, parser, blank())


def strip(parser: Parser) -> Parser:
    return and_(folds.snd, blank(), parser, blank())


def tok(parser: Parser) -> Parser:
    """``parser`` followed by any whitespace."""
    return and_(folds.fst, parser, blank())


def sym(s: str) -> Parser:
    return tok(string(s))


def total(parser: Parser) -> Parser:
    """``parser`` covering the whole input, surrounding whitespace allowed."""
    return whole(strip(parser))


def between(parser: Parser, open_: str, close: str) -> Parser:
    return and_(folds.snd, string(open_), parser, string(close))


def parens(parser: Parser) -> Parser:
    return between(parser, "(", ")")


def braces(parser: Parser) -> Parser:
    return between(parser, "<", ">")


def brackets(parser: Parser) -> Parser:
    return between(parser, "{", "}")


def squares(parser: Parser) -> Parser:
    return between(parser, "[", "]")


def tok_between(parser: Parser, open_: str, close: str) -> Parser:
    return and_(folds.snd, sym(open_), tok(parser), sym(close))


def tok_parens(parser: Parser) -> Parser:
    return tok_between(parser, "(", ")")


def tok_braces(parser: Parser) -> Parser:
    return tok_between(parser, "<", ">")


def tok_brackets(parser: Parser) -> Parser:
    return tok_between(parser, "{", "}")


def tok_squares(parser: Parser) -> Parser:
    return tok_between(parser, "[", "]")