"""A generic syntax tree and the parsers that build one."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence, TextIO

from skyler import combinators, core
from skyler.core import Parser
from skyler.state import State


class TraversalOrder(Enum):
    """The order in which :meth:`Ast.traverse` visits nodes."""

    PRE = "pre"
    POST = "post"


@dataclass
class Ast:
    """A tree node with a tag, matched text, a position and children.

    Equality compares tags, contents and children but not positions.
    """

    tag: str
    contents: str = ""
    state: State = field(default_factory=State, compare=False)
    children: List[Ast] = field(default_factory=list)

    @classmethod
    def build(cls, tag: str, *children: Ast) -> Ast:
        """A node with no contents holding ``children``."""
        node = cls(tag, "")
        for child in children:
            node.add_child(child)
        return node

    def add_root(self) -> Ast:
        """Wrap the node in a ``>`` root if it has two or more children."""
        if len(self.children) < 2:
            return self
        return Ast(">", "").add_child(self)

    def add_child(self, child: Ast) -> Ast:
        self.children.append(child)
        return self

    def add_tag(self, tag: str) -> Ast:
        """Prefix the tag with ``tag`` and a ``|``."""
        self.tag = f"{tag}|{self.tag}"
        return self

    def add_root_tag(self, tag: str) -> Ast:
        """Prefix the tag with ``tag`` less its last character."""
        self.tag = tag[:-1] + self.tag
        return self

    def _render(self, depth: int, out: List[str]) -> None:
        indent = "  " * depth
        if self.contents:
            out.append(
                f"{indent}{self.tag}:{self.state.row + 1}:{self.state.col + 1} "
                f"'{self.contents}'\n"
            )
        else:
            out.append(f"{indent}{self.tag} \n")
        for child in self.children:
            if child is None:
                out.append("NULL\n")
            else:
                child._render(depth + 1, out)

    def render(self) -> str:
        """The tree as indented lines, one node per line."""
        out: List[str] = []
        self._render(0, out)
        return "".join(out)

    def print_to(self, stream: Optional[TextIO] = None) -> None:
        """Write :meth:`render` to ``stream`` (standard output by default)."""
        (stream if stream is not None else sys.stdout).write(self.render())

    def get_index(self, tag: str, lb: int = 0) -> int:
        """Index of the first child from ``lb`` on with ``tag``, or -1."""
        for index in range(max(lb, 0), len(self.children)):
            if self.children[index].tag == tag:
                return index
        return -1

    def get_child(self, tag: str, lb: int = 0) -> Optional[Ast]:
        """The first child from ``lb`` on with ``tag``, or None."""
        index = self.get_index(tag, lb)
        return self.children[index] if index >= 0 else None

    def traverse(self, order: TraversalOrder = TraversalOrder.PRE) -> Iterator[Ast]:
        """Visit every node depth first, in pre-order or post-order."""
        if order is TraversalOrder.PRE:
            stack = [self]
            while stack:
                node = stack.pop()
                yield node
                stack.extend(reversed(node.children))
        else:
            pending = [(self, False)]
            while pending:
                node, expanded = pending.pop()
                if expanded or not node.children:
                    yield node
                    continue
                pending.append((node, True))
                pending.extend((child, False) for child in reversed(node.children))


def fold_ast(xs: Sequence[Optional[Ast]]) -> Optional[Ast]:
    """Join tree results under a ``>`` node, flattening where possible."""
    n = len(xs)
    if n == 0:
        return None
    if n == 1:
        return xs[0]
    if n == 2 and xs[1] is None:
        return xs[0]
    if n == 2 and xs[0] is None:
        return xs[1]

    root = Ast(">", "")
    for node in xs:
        if node is None:
            continue
        if not node.children:
            root.add_child(node)
        elif len(node.children) == 1:
            root.add_child(node.children[0].add_root_tag(node.tag))
        else:
            root.children.extend(node.children)

    if root.children:
        root.state = root.children[0].state
    return root


def str_ast(x: str) -> Ast:
    """A leaf holding the matched text."""
    return Ast("", x)


def state_ast(xs: Sequence[Any]) -> Optional[Ast]:
    """Stamp the tree in ``xs[1]`` with the position in ``xs[0]``."""
    position, node = xs[0], xs[1]
    if node is not None:
        node.state = position
    return node


def _set_tag(node: Optional[Ast], t: str) -> Optional[Ast]:
    if node is not None:
        node.tag = t
    return node


def _prefix_tag(node: Optional[Ast], t: str) -> Optional[Ast]:
    return node.add_tag(t) if node is not None else None


def _add_root(node: Optional[Ast]) -> Optional[Ast]:
    return node.add_root() if node is not None else None


def tag(parser: Parser, t: str) -> Parser:
    """Replace the tag of the resulting tree with ``t``."""
    return core.apply_to(parser, _set_tag, t)


def add_tag(parser: Parser, t: str) -> Parser:
    """Prefix the tag of the resulting tree with ``t``."""
    return core.apply_to(parser, _prefix_tag, t)


def root(parser: Parser) -> Parser:
    """Give the resulting tree a single root."""
    return core.apply(parser, _add_root)


def with_state(parser: Parser) -> Parser:
    """Record where the resulting tree started in the input."""
    return core.and_(state_ast, core.state(), parser)


def total(parser: Parser) -> Parser:
    return combinators.total(parser)


def not_(parser: Parser) -> Parser:
    return core.not_(parser)


def maybe(parser: Parser) -> Parser:
    return core.maybe(parser)


def many(parser: Parser) -> Parser:
    return core.many(fold_ast, parser)


def many1(parser: Parser) -> Parser:
    return core.many1(fold_ast, parser)


def count(n: int, parser: Parser) -> Parser:
    return core.count(n, fold_ast, parser)


def or_(*parsers: Parser) -> Parser:
    return core.or_(*parsers)


def and_(*parsers: Parser) -> Parser:
    return core.and_(fold_ast, *parsers)