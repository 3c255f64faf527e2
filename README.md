# skyler

A small parser combinator library. Parsers are built in Python from
primitive character matchers and combinators, run over strings, files or
pipes with backtracking, and report failures as readable errors. A generic
syntax tree type and tree-building combinators are included.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Commands

- `skyler-prompt` starts a toy shell that answers every line it reads with
  `No, you're a <line>`.
- `skyler-hello` prints a greeting followed by a few lines of loop output.

Leave `skyler-prompt` with Ctrl+C or end of input.

## Building parsers

The primitives and combinators are in `skyler.core`; ready-made parsers such
as `digits`, `ident`, `string_lit`, `tok` and `sym` are in
`skyler.combinators`; fold and transform functions such as `strfold`, `fst`,
`snd` and `to_int` are in `skyler.folds`.

```python
from skyler import combinators, core, folds

word = core.many1(folds.strfold, combinators.alpha())
words = core.sepby1(folds.strfold, combinators.sym(","), combinators.tok(word))

words.parse("<example>", "ab, cd")   # "abcd"
```

Named parsers are created with `core.new(name)` and given their behaviour
later with `Parser.define`, so rules can refer to each other recursively;
`core.cleanup` undefines a set of them again. `core.predictive` runs a parser
without backtracking.

Input is parsed with `Parser.parse(filename, string)`, or from an open
seekable file, a forward-only stream or a path with `Parser.parse_file`,
`Parser.parse_pipe` and `Parser.parse_contents`. The lower-level character
source is `skyler.inputs.Input`.

## Errors

A failed parse raises `skyler.state.ParseError`. Its `describe()` gives a
line of the form

```
filename:row:col: error: expected digit or letter at 'x'
```

or `filename: error: <message>` for failures such as `core.fail`. Errors
reached at the furthest position in the input are merged, as
`skyler.state.merge_errors` does.

## Syntax trees

`skyler.tree.Ast` is a node with a tag, matched text, a `State` position and
children. The combinators in `skyler.tree` (`and_`, `or_`, `many`, `many1`,
`count`, `maybe`, `not_`, `tag`, `add_tag`, `root`, `with_state`, `total`)
build trees as they parse, with `str_ast` turning matched text into a leaf
and `fold_ast` joining results.

Trees can be printed with `Ast.render` or `Ast.print_to`, searched with
`Ast.get_child` and `Ast.get_index`, and walked in pre-order or post-order
with `Ast.traverse` and `TraversalOrder`.

## Inspecting and testing parsers

`skyler.display.render` and `skyler.display.print_parser` give a readable
form of a parser, and `skyler.display.stats` reports how many nodes it has.
`skyler.optimise.optimise` flattens nested choices and sequences in place.
`skyler.checks.check_pass` and `skyler.checks.check_fail` run a parser on a
string and compare the result with an expected value.

## What it does not do

There is no compiler from regular-expression strings to parsers and no text
notation for writing grammar rules: every parser is assembled from the
Python functions above. There is also no interactive expression reader that
parses lines into syntax trees; the only interactive command is the echoing
`skyler-prompt`.