"""Helpers that run a parser on a string and compare the result with an expectation."""

from __future__ import annotations

import operator
from typing import Any, Callable

from skyler.core import Parser
from skyler.state import ParseError

Tester = Callable[[Any, Any], Any]
Printer = Callable[[Any], str]


def check_pass(
    parser: Parser,
    string: str,
    expected: Any,
    tester: Tester = operator.eq,
    printer: Printer = repr,
) -> bool:
    """True if ``string`` parses to a result that ``tester`` accepts.

    On a mismatch the result and the expectation are printed; on a parse
    failure the error is printed.
    """
    try:
        result = parser.parse("<test>", string)
    except ParseError as err:
        err.print_to()
        return False
    if tester(result, expected):
        return True
    print(f"Got {printer(result)}")
    print(f"Expected {printer(expected)}")
    return False


def check_fail(
    parser: Parser,
    string: str,
    expected: Any,
    tester: Tester = operator.eq,
) -> bool:
    """True if ``string`` fails to parse or parses to something ``tester`` rejects."""
    try:
        result = parser.parse("<test>", string)
    except ParseError:
        return True
    return not tester(result, expected)