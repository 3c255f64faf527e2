"""An interactive prompt that answers every line it is given."""

from __future__ import annotations

import sys
from typing import List, Optional


def respond(line: str) -> str:
    """The reply to one line of input."""
    return f"No, you're a {line}"


def main(argv: Optional[List[str]] = None) -> int:
    print("Welcome to Skyler")
    print("Press Ctrl+c to Exit\n")
    while True:
        try:
            line = input("shell@skyler: => ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        print(respond(line))


if __name__ == "__main__":
    sys.exit(main())