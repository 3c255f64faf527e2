from skyler import core, folds, tree
from skyler.core import Kind
from skyler.display import node_count
from skyler.optimise import optimise


def leaf(s):
    return core.apply(core.string(s), tree.str_ast)


def test_merges_right_or():
    p = core.or_(core.char("a"), core.or_(core.char("b"), core.char("c")))
    optimise(p)
    assert len(p.parsers) == 3
    assert p.parse("<t>", "c") == "c"


def test_merges_left_or():
    p = core.or_(core.or_(core.char("a"), core.char("b")), core.char("c"))
    optimise(p)
    assert len(p.parsers) == 3
    assert [q.parse("<t>", ch) for q, ch in zip(p.parsers, "abc")] == list("abc")


def test_keeps_named_or():
    named = core.new("named").define(core.or_(core.char("b"), core.char("c")))
    p = core.or_(core.char("a"), named)
    optimise(p)
    assert len(p.parsers) == 2
    assert p.parsers[1] is named


def test_removes_pass_in_ast_sequence():
    p = core.and_(tree.fold_ast, core.pass_(), leaf("a"))
    optimise(p)
    assert p.kind is Kind.APPLY
    assert p.parse("<t>", "a") == tree.Ast("", "a")


def test_merges_ast_sequences():
    p = tree.and_(tree.and_(leaf("a"), leaf("b")), tree.and_(leaf("c"), leaf("d")))
    before = p.copy().parse("<t>", "abcd")
    optimise(p)
    assert len(p.parsers) == 4
    assert p.parse("<t>", "abcd") == before


def test_removes_string_lift():
    p = core.and_(folds.strfold, core.lift(folds.ctor_str), core.char("a"))
    optimise(p)
    assert p.kind is Kind.EXPECT
    assert p.parse("<t>", "a") == "a"


def test_merges_string_sequences():
    p = core.and_(
        folds.strfold,
        core.and_(folds.strfold, core.char("a"), core.char("b")),
        core.char("c"),
    )
    optimise(p)
    assert len(p.parsers) == 3
    assert p.parse("<t>", "abc") == "abc"


def test_leaves_other_folds_alone():
    inner = core.and_(folds.strfold, core.char("a"), core.char("b"))
    p = core.and_(folds.fst, inner, core.char("c"))
    optimise(p)
    assert len(p.parsers) == 2
    assert p.parse("<t>", "abc") == "ab"


def test_optimises_nested_nodes():
    inner = core.or_(core.or_(core.char("a"), core.char("b")), core.char("c"))
    p = core.expect(inner, "letter")
    count_before = node_count(p)
    optimise(p)
    assert len(p.inner.parsers) == 3
    assert node_count(p) < count_before
    assert p.parse("<t>", "b") == "b"


def test_node_count_never_grows():
    p = tree.and_(tree.and_(leaf("x"), leaf("y")), leaf("z"))
    count_before = node_count(p)
    optimise(p)
    assert node_count(p) <= count_before
    assert [c.contents for c in p.parse("<t>", "xyz").children] == ["x", "y", "z"]