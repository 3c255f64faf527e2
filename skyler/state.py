"""Positions in the input and the errors a parse can report."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TextIO


@dataclass(frozen=True)
class State:
    """A position in the input.

    ``pos`` is the character offset, ``row`` and ``col`` are zero based and
    ``term`` records that the end of the input has already been matched.
    """

    pos: int = 0
    row: int = 0
    col: int = 0
    term: bool = False

    @classmethod
    def invalid(cls) -> State:
        """A position before any real one, used as a starting point for maxima."""
        return cls(pos=-1, row=-1, col=-1, term=False)


_CHAR_NAMES = {
    "\a": "bell",
    "\b": "backspace",
    "\f": "formfeed",
    "\r": "carriage return",
    "\v": "vertical tab",
    "\0": "end of input",
    "": "end of input",
    "\n": "newline",
    "\t": "tab",
    " ": "space",
}


def _describe_char(c: str) -> str:
    return _CHAR_NAMES.get(c, f"'{c}'")


def _join_alternatives(items: Sequence[str]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " or " + items[-1]


class ParseError(Exception):
    """What went wrong in a parse: either a list of expectations or a failure message."""

    def __init__(
        self,
        filename: str,
        state: Optional[State] = None,
        expected: Iterable[str] = (),
        failure: Optional[str] = None,
        received: str = " ",
    ) -> None:
        super().__init__(filename)
        self.filename = filename
        self.state = state if state is not None else State()
        self.expected = list(expected)
        self.failure = failure
        self.received = received

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"ParseError(filename={self.filename!r}, state={self.state!r}, "
            f"expected={self.expected!r}, failure={self.failure!r}, "
            f"received={self.received!r})"
        )

    def describe(self) -> str:
        """The error as a human readable line, ending in a newline."""
        if self.failure:
            return f"{self.filename}: error: {self.failure}\n"
        head = (
            f"{self.filename}:{self.state.row + 1}:{self.state.col + 1}: "
            "error: expected "
        )
        if not self.expected:
            body = "ERROR: NOTHING EXPECTED"
        else:
            body = _join_alternatives(self.expected)
        return f"{head}{body} at {_describe_char(self.received)}\n"

    def print_to(self, stream: Optional[TextIO] = None) -> None:
        """Write the description to ``stream`` (standard output by default)."""
        (stream if stream is not None else sys.stdout).write(self.describe())

    def repeat(self, prefix: str) -> ParseError:
        """Collapse the expectations into one, prefixed by ``prefix``."""
        if not self.expected:
            self.expected = [""]
        else:
            self.expected = [prefix + _join_alternatives(self.expected)]
        return self

    def many1(self) -> ParseError:
        """Rephrase the expectations as "one or more of" them."""
        return self.repeat("one or more of ")

    def count(self, n: int) -> ParseError:
        """Rephrase the expectations as ``n`` of them."""
        return self.repeat(f"{n} of ")

    @classmethod
    def from_file(cls, filename: str, failure: str) -> ParseError:
        """An error about a file as a whole, such as one that cannot be opened."""
        return cls(filename, State(), (), failure, " ")


def merge_errors(errors: Iterable[Optional[ParseError]]) -> Optional[ParseError]:
    """Combine errors, keeping those that got furthest into the input.

    ``None`` entries are skipped; if nothing is left the result is ``None``.
    A failure message at the furthest position wins over expectations.
    """
    present = [e for e in errors if e is not None]
    if not present:
        return None

    furthest = State.invalid()
    for err in present:
        if err.state.pos > furthest.pos:
            furthest = err.state

    merged = ParseError(present[-1].filename, furthest)
    for err in present:
        if err.state.pos < furthest.pos:
            continue
        if err.failure:
            merged.failure = err.failure
            break
        merged.received = err.received
        for item in err.expected:
            if item not in merged.expected:
                merged.expected.append(item)
    return merged