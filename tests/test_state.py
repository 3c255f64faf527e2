import io

import pytest

from skyler.state import ParseError, State, merge_errors


def _err(pos, expected, received="x", failure=None, filename="f"):
    return ParseError(filename, State(pos, 0, pos), expected, failure, received)


def test_invalid_state():
    s = State.invalid()
    assert (s.pos, s.row, s.col, s.term) == (-1, -1, -1, False)


def test_default_state_is_origin():
    assert State() == State(0, 0, 0, False)


def test_describe_failure():
    e = ParseError("f", failure="boom")
    assert e.describe() == "f: error: boom\n"


def test_describe_position_is_one_based():
    e = ParseError("f", State(10, 2, 4), ["a"], received="q")
    assert e.describe().startswith("f:3:5: error: expected a at")


def test_describe_nothing_expected():
    e = ParseError("f", State(), [], received="x")
    assert "ERROR: NOTHING EXPECTED" in e.describe()


def test_describe_two_and_three_expected():
    assert "expected a or b at" in _err(0, ["a", "b"]).describe()
    assert "expected a, b or c at" in _err(0, ["a", "b", "c"]).describe()


@pytest.mark.parametrize(
    "received, name",
    [("", "end of input"), ("\0", "end of input"), ("\n", "newline"),
     ("\t", "tab"), (" ", "space"), ("\r", "carriage return")],
)
def test_describe_named_characters(received, name):
    text = _err(0, ["a"], received=received).describe()
    assert text.endswith(f" at {name}\n")


def test_describe_plain_character_quoted():
    assert _err(0, ["a"], received="z").describe().endswith(" at 'z'\n")


def test_str_matches_describe():
    e = _err(0, ["a", "b"])
    assert str(e) == e.describe()


def test_print_to_stream():
    e = _err(0, ["a"])
    out = io.StringIO()
    e.print_to(out)
    assert out.getvalue() == e.describe()


def test_repeat_empty_gives_blank_expectation():
    e = _err(0, [])
    assert e.repeat("prefix ").expected == [""]


def test_many1_single():
    assert _err(0, ["'a'"]).many1().expected == ["one or more of 'a'"]


def test_many1_several():
    e = _err(0, ["a", "b", "c"]).many1()
    assert e.expected == ["one or more of a, b or c"]


def test_count_prefix():
    assert _err(0, ["x"]).count(3).expected == ["3 of x"]


def test_from_file():
    e = ParseError.from_file("missing.txt", "Unable to open file!")
    assert e.failure == "Unable to open file!"
    assert e.state == State()
    assert e.received == " "
    assert e.describe() == "missing.txt: error: Unable to open file!\n"


def test_merge_nothing():
    assert merge_errors([]) is None
    assert merge_errors([None, None]) is None


def test_merge_keeps_furthest():
    merged = merge_errors([_err(1, ["a"]), _err(3, ["b"], received="y"), _err(2, ["c"])])
    assert merged.state.pos == 3
    assert merged.expected == ["b"]
    assert merged.received == "y"


def test_merge_combines_ties_without_duplicates():
    merged = merge_errors([_err(2, ["a", "b"]), None, _err(2, ["b", "c"])])
    assert merged.expected == ["a", "b", "c"]


def test_merge_failure_wins():
    merged = merge_errors([_err(2, ["a"]), _err(2, [], failure="bad")])
    assert merged.failure == "bad"
    assert merged.describe().endswith("error: bad\n")


def test_merge_ignores_invalid_state_error():
    first = ParseError("f", State.invalid(), (), "Unknown Error")
    merged = merge_errors([first, _err(0, ["a"])])
    assert merged.failure is None
    assert merged.expected == ["a"]