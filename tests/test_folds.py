import pytest

from skyler.folds import (
    ctor_null,
    ctor_str,
    discard,
    escape,
    escape_char_raw,
    escape_regex,
    escape_string_raw,
    fold_null,
    fst,
    snd,
    strfold,
    strtrim,
    strtriml,
    strtrimr,
    to_float,
    to_hex,
    to_int,
    to_oct,
    trd,
    unescape,
    unescape_char_raw,
    unescape_regex,
    unescape_string_raw,
)


def test_constructors():
    assert ctor_null() is None
    assert ctor_str() == ""
    assert discard("anything") is None


@pytest.mark.parametrize("n", [0, 7, 42, 1000, -35])
def test_int_round_trips(n):
    assert to_int(str(n)) == n
    assert to_hex(format(n, "x")) == n
    assert to_oct(format(n, "o")) == n


def test_int_stops_at_garbage():
    assert to_int("123abc") == to_int("123")
    assert to_int("  +9 ") == to_int("9")
    assert to_int("") == 0
    assert to_int("abc") == 0


def test_hex_accepts_prefix():
    assert to_hex("0x1A") == to_hex("1a")
    assert to_oct("19") == to_oct("1")


@pytest.mark.parametrize("x", [1.5, -0.25, 2000.0, 3.0e-5])
def test_float_round_trips(x):
    assert to_float(repr(x)) == x


def test_float_defaults_and_exponent():
    assert to_float("abc") == 0.0
    assert to_float("2e3xyz") == to_float("2000")


def test_trimming():
    s = "  hi there \n"
    assert strtrim(s) == "hi there"
    assert strtriml(s) == "hi there \n"
    assert strtrimr(s) == "  hi there"


def test_escape_c():
    assert escape("a\nb") == "a\\nb"
    assert escape("\\") == "\\\\"
    assert unescape("\\n") == "\n"


@pytest.mark.parametrize("s", ["plain", "tab\there", "q'\"", "back\\slash", "\a\b\f\r\v"])
def test_escape_round_trip(s):
    assert unescape(escape(s)) == s


def test_unescape_unknown_stays():
    assert unescape("\\q") == "\\q"
    assert unescape("end\\") == "end\\"


def test_raw_escapes_round_trip():
    assert escape_regex("a/b") == "a\\/b"
    assert unescape_regex(escape_regex("a/b/c")) == "a/b/c"
    assert escape_string_raw('say "hi"') == 'say \\"hi\\"'
    assert unescape_string_raw(escape_string_raw('say "hi"')) == 'say "hi"'
    assert escape_char_raw("it's") == "it\\'s"
    assert unescape_char_raw(escape_char_raw("it's")) == "it's"


def test_raw_escapes_leave_others():
    assert escape_regex("a\nb") == "a\nb"
    assert unescape_string_raw("\\n") == "\\n"


def test_selectors():
    xs = ["a", "b", "c"]
    assert fst(xs) == "a"
    assert snd(xs) == "b"
    assert trd(xs) == "c"
    assert fold_null(xs) is None


def test_strfold():
    assert strfold([]) == ""
    assert strfold(["ab", "c", "", "d"]) == "abcd"
    assert strfold(["x", None, "y"]) == "xy"