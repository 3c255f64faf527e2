"""Character sources with marking and backtracking for the parsers."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple

from skyler.state import ParseError, State


class _Mode(Enum):
    STRING = "string"
    FILE = "file"
    PIPE = "pipe"


def _as_text(data: Any) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("latin-1")
    return data


class Input:
    """A source of characters: a string, a seekable file or a pipe.

    Strings and files are rewound by position. A pipe cannot seek, so while
    any mark is held the characters read are kept in a buffer and replayed
    after a rewind. The end of input is reported as the empty string.
    """

    def __init__(self, filename: str, mode: _Mode, *, string: str = "", file: Any = None) -> None:
        self.filename = filename
        self._mode = mode
        self._string = string
        self._file = file
        self.state = State()
        self.last = ""
        self.suppress = 0
        self.backtrack = 1
        self._marks: List[Tuple[State, str, Any]] = []
        self._buffer: Optional[List[str]] = None
        self._buffer_start = 0
        self._pushback: List[str] = []
        self._cookie: Any = None

    @classmethod
    def from_string(cls, filename: str, string: str) -> Input:
        return cls(filename, _Mode.STRING, string=string)

    @classmethod
    def from_file(cls, filename: str, file: Any) -> Input:
        """Read from a seekable file object, text or binary."""
        return cls(filename, _Mode.FILE, file=file)

    @classmethod
    def from_pipe(cls, filename: str, pipe: Any) -> Input:
        """Read from a stream that only supports ``read``."""
        return cls(filename, _Mode.PIPE, file=pipe)

    @contextmanager
    def suppressed(self) -> Iterator[Input]:
        """Within the block no errors are produced."""
        self.suppress += 1
        try:
            yield self
        finally:
            self.suppress -= 1

    @contextmanager
    def no_backtrack(self) -> Iterator[Input]:
        """Within the block marks and rewinds have no effect."""
        self.backtrack -= 1
        try:
            yield self
        finally:
            self.backtrack += 1

    # Marks

    def mark(self) -> None:
        """Remember the current position so that it can be rewound to."""
        if self.backtrack < 1:
            return
        cookie = self._file.tell() if self._mode is _Mode.FILE else None
        self._marks.append((self.state, self.last, cookie))
        if self._mode is _Mode.PIPE and len(self._marks) == 1:
            self._buffer = []
            self._buffer_start = self.state.pos

    def unmark(self) -> None:
        """Forget the most recent mark."""
        if self.backtrack < 1:
            return
        self._marks.pop()
        if self._mode is _Mode.PIPE and not self._marks and self._buffer is not None:
            unread = self._buffer[self.state.pos - self._buffer_start:]
            self._pushback.extend(reversed(unread))
            self._buffer = None

    def rewind(self) -> None:
        """Return to the most recent mark and forget it."""
        if self.backtrack < 1:
            return
        self.state, self.last, cookie = self._marks[-1]
        if self._mode is _Mode.FILE:
            self._file.seek(cookie)
        self.unmark()

    # Reading

    def _read_raw(self) -> str:
        if self._pushback:
            return self._pushback.pop()
        return _as_text(self._file.read(1))

    def _in_buffer(self) -> bool:
        return (
            self._buffer is not None
            and self.state.pos < self._buffer_start + len(self._buffer)
        )

    def _getc(self) -> str:
        if self._mode is _Mode.STRING:
            return self._string[self.state.pos:self.state.pos + 1]
        if self._mode is _Mode.FILE:
            self._cookie = self._file.tell()
            return _as_text(self._file.read(1))
        if self._in_buffer():
            return self._buffer[self.state.pos - self._buffer_start]
        return self._read_raw()

    def peek(self) -> str:
        """The next character without consuming it, or "" at the end."""
        if self._mode is _Mode.STRING:
            return self._string[self.state.pos:self.state.pos + 1]
        if self._mode is _Mode.FILE:
            cookie = self._file.tell()
            c = _as_text(self._file.read(1))
            self._file.seek(cookie)
            return c
        if self._in_buffer():
            return self._buffer[self.state.pos - self._buffer_start]
        c = self._read_raw()
        if c:
            self._pushback.append(c)
        return c

    def terminated(self) -> bool:
        return self.peek() == ""

    def _reject(self, c: str) -> None:
        if self._mode is _Mode.FILE:
            self._file.seek(self._cookie)
        elif self._mode is _Mode.PIPE and not self._in_buffer():
            self._pushback.append(c)

    def _accept(self, c: str) -> str:
        if self._mode is _Mode.PIPE and self._buffer is not None and not self._in_buffer():
            self._buffer.append(c)
        self.last = c
        s = self.state
        if c == "\n":
            self.state = State(s.pos + 1, s.row + 1, 0, s.term)
        else:
            self.state = State(s.pos + 1, s.row, s.col + 1, s.term)
        return c

    def _match(self, pred: Callable[[str], Any]) -> Optional[str]:
        if self.terminated():
            return None
        x = self._getc()
        if pred(x):
            return self._accept(x)
        self._reject(x)
        return None

    # Primitive matches: each returns the matched text or None.

    def any(self) -> Optional[str]:
        return self._match(lambda x: True)

    def char(self, c: str) -> Optional[str]:
        return self._match(lambda x: x == c)

    def range(self, lo: str, hi: str) -> Optional[str]:
        return self._match(lambda x: lo <= x <= hi)

    def one_of(self, chars: str) -> Optional[str]:
        return self._match(lambda x: x in chars)

    def none_of(self, chars: str) -> Optional[str]:
        return self._match(lambda x: x not in chars)

    def satisfy(self, cond: Callable[[str], Any]) -> Optional[str]:
        return self._match(cond)

    def string(self, s: str) -> Optional[str]:
        """Match ``s`` entirely, or consume nothing."""
        self.mark()
        for ch in s:
            if self.char(ch) is None:
                self.rewind()
                return None
        self.unmark()
        return s

    def anchor(self, f: Callable[[str, str], Any]) -> bool:
        """Test ``f`` on the previous and the next character."""
        return bool(f(self.last, self.peek()))

    def soi(self) -> bool:
        return self.last == ""

    def eoi(self) -> bool:
        """True once at the end of the input; later calls are False."""
        if self.state.term:
            return False
        if self.terminated():
            s = self.state
            self.state = State(s.pos, s.row, s.col, True)
            return True
        return False

    def state_copy(self) -> State:
        return State(self.state.pos, self.state.row, self.state.col, self.state.term)

    # Errors

    def error(self, expected: str) -> Optional[ParseError]:
        """An error expecting ``expected`` here, or None while suppressed."""
        if self.suppress:
            return None
        return ParseError(self.filename, self.state, [expected], None, self.peek())

    def failure(self, message: str) -> Optional[ParseError]:
        """A failure with ``message`` here, or None while suppressed."""
        if self.suppress:
            return None
        return ParseError(self.filename, self.state, (), message, " ")