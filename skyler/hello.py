"""A greeting followed by a few repeated lines."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO


def _out(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stdout


def for_loop(stream: Optional[TextIO] = None) -> None:
    """Write ``forLoop`` five times."""
    out = _out(stream)
    for _ in range(5):
        out.write("forLoop\n")


def while_loop(stream: Optional[TextIO] = None) -> None:
    """Write ``whileLoop`` five times."""
    out = _out(stream)
    remaining = 5
    while remaining > 0:
        out.write("whileLoop\n")
        remaining -= 1


def func_print(n: int, stream: Optional[TextIO] = None) -> None:
    """Write ``funcPrint`` ``n + 1`` times."""
    out = _out(stream)
    for _ in range(n + 1):
        out.write("funcPrint\n")


def main(argv: Optional[List[str]] = None) -> int:
    print("Hello, world!")
    for_loop()
    while_loop()
    func_print(5)
    return 0


if __name__ == "__main__":
    sys.exit(main())