import pytest

from skyler import combinators as c
from skyler import folds
from skyler.core import and_, string
from skyler.state import ParseError


def run(parser, text):
    return parser.parse("<test>", text)


def test_whitespaces_collects_spaces():
    assert run(c.whitespaces(), "  \t x") == "  \t "


def test_blank_produces_none():
    assert run(c.blank(), "   ") is None


def test_escape_keeps_backslash():
    assert run(c.escape(), "\\n") == "\\n"


@pytest.mark.parametrize(
    "factory, good, bad",
    [
        (c.digit, "7", "a"),
        (c.hexdigit, "F", "g"),
        (c.octdigit, "7", "8"),
        (c.lower, "q", "Q"),
        (c.upper, "Q", "q"),
        (c.alpha, "Z", "1"),
        (c.underscore, "_", "a"),
        (c.alphanum, "_", "-"),
        (c.newline, "\n", " "),
        (c.tab, "\t", " "),
        (c.whitespace, " ", "x"),
    ],
)
def test_single_character_classes(factory, good, bad):
    assert run(factory(), good) == good
    with pytest.raises(ParseError):
        run(factory(), bad)


def test_digits_stop_at_non_digit():
    assert run(c.digits(), "123abc") == "123"


def test_digits_error_names_expectation():
    with pytest.raises(ParseError) as info:
        run(c.digits(), "abc")
    assert info.value.expected == ["digits"]


def test_integer_converts():
    assert run(c.integer(), "42") == 42


def test_integer_error():
    with pytest.raises(ParseError) as info:
        run(c.integer(), "x")
    assert info.value.expected == ["integer"]
    assert info.value.received == "x"


def test_hexadecimal_and_octal():
    assert run(c.hexadecimal(), "ff") == 0xFF
    assert run(c.octal(), "17") == 0o17


def test_number_prefers_decimal():
    assert run(c.number(), "12") == 12


@pytest.mark.parametrize("text", ["-1.5e3", "7", "+3.25", "10E-2"])
def test_real_returns_text(text):
    assert run(c.real(), text) == text


def test_float_converts():
    assert run(c.float_(), "2.5") == 2.5


def test_char_lit():
    assert run(c.char_lit(), "'a'") == "a"
    assert run(c.char_lit(), "'\\n'") == "\\n"


def test_string_lit():
    assert run(c.string_lit(), '"hi there"') == "hi there"
    assert run(c.string_lit(), '"a\\"b"') == 'a\\"b'


def test_regex_lit():
    assert run(c.regex_lit(), "/ab+/") == "ab+"


def test_ident():
    assert run(c.ident(), "_foo1 bar") == "_foo1"
    with pytest.raises(ParseError):
        run(c.ident(), "1abc")


def test_whole_requires_entire_input():
    assert run(c.whole(c.digits()), "12") == "12"
    with pytest.raises(ParseError):
        run(c.whole(c.digits()), "12 ")


def test_startwith_and_endwith():
    assert run(c.startwith(c.digits()), "12x") == "12"
    assert run(c.endwith(c.digits()), "12") == "12"
    with pytest.raises(ParseError):
        run(c.endwith(c.digits()), "12x")


def test_strip_variants():
    assert run(c.tok(c.digits()), "12   ") == "12"
    assert run(c.stripl(c.digits()), "   12") == "12"
    assert run(c.stripr(c.digits()), "12   ") == "12"
    assert run(c.strip(c.digits()), "  12  ") == "12"


def test_sym_and_total():
    assert run(c.sym("+"), "+  ") == "+"
    assert run(c.total(c.digits()), "  12  ") == "12"


@pytest.mark.parametrize(
    "factory, text",
    [
        (c.parens, "(ab)"),
        (c.braces, "<ab>"),
        (c.brackets, "{ab}"),
        (c.squares, "[ab]"),
    ],
)
def test_between_variants(factory, text):
    assert run(factory(string("ab")), text) == "ab"
    with pytest.raises(ParseError):
        run(factory(string("ab")), "ab")


@pytest.mark.parametrize(
    "factory, text",
    [
        (c.tok_parens, "( ab ) "),
        (c.tok_braces, "< ab > "),
        (c.tok_brackets, "{ ab } "),
        (c.tok_squares, "[ ab ] "),
    ],
)
def test_tok_between_variants(factory, text):
    assert run(factory(string("ab")), text) == "ab"


def test_boundary():
    p = and_(folds.fst, string("ab"), c.boundary())
    assert run(p, "ab cd") == "ab"
    assert run(p, "ab") == "ab"
    with pytest.raises(ParseError):
        run(p, "abc")


def test_boundary_newline():
    p = and_(folds.strfold, string("a\n"), c.boundary_newline(), string("b"))
    assert run(p, "a\nb") == "a\nb"
    q = and_(folds.strfold, string("a"), c.boundary_newline(), string("b"))
    with pytest.raises(ParseError):
        run(q, "ab")