import sys

import pytest
from hypothesis import given, strategies as st

from lispy.errors import LispyConfigError, LispySyntaxError
from lispy.reader.ast import AstNode
from lispy.reader.grammar import LispyGrammar, nesting_depth, parse
from lispy.reader.reader import read
from lispy.types import Error, Number, QExpr, SExpr, Symbol


def test_parse_tree_shape():
    root = parse("(+ 1 {a})")
    assert root.tag == ">"
    assert [c.tag for c in root.children] == ["regex", "expr|sexpr", "regex"]
    sexpr = root.children[1]
    assert [(c.tag, c.contents) for c in sexpr.children] == [
        ("char", "("),
        ("expr|symbol|regex", "+"),
        ("expr|number|regex", "1"),
        ("expr|qexpr", ""),
        ("char", ")"),
    ]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", "()"),
        ("1", "(1)"),
        ("-42", "(-42)"),
        ("- 4", "(- 4)"),
        ("+ 1 2", "(+ 1 2)"),
        ("(+ 1 2)", "((+ 1 2))"),
        ("{head (list 1 2)}", "({head (list 1 2)})"),
        ("  (a   b)\n{c}  ", "((a b) {c})"),
        ("\\ {x} {x}", "(\\ {x} {x})"),
        ("(== <= != & % ^)", "((== <= != & % ^))"),
        ("()", "(())"),
    ],
)
def test_read_source(source, expected):
    assert str(read(parse(source))) == expected


def test_read_types():
    v = read(parse("1 x (y) {z}"))
    assert isinstance(v, SExpr)
    assert v[0] == Number(1)
    assert v[1] == Symbol("x")
    assert v[2] == SExpr([Symbol("y")])
    assert v[3] == QExpr([Symbol("z")])


@pytest.mark.parametrize("source", ["(", "(1 2", "}", "{1 2)", "(a #b)", "\"str\""])
def test_syntax_errors(source):
    with pytest.raises(LispySyntaxError):
        parse(source)


def test_grammar_instances_are_independent():
    g = LispyGrammar()
    assert str(read(g.parse("{1}"))) == "({1})"


def test_number_range():
    assert read(parse("9223372036854775807"))[0] == Number(9223372036854775807)
    assert read(parse("-9223372036854775808"))[0] == Number(-9223372036854775808)
    assert read(parse("9223372036854775808"))[0] == Error("invalid number")
    assert read(parse("-9223372036854775809"))[0] == Error("invalid number")


def test_number_range_from_config(monkeypatch):
    monkeypatch.setenv("LISPY_INT_BITS", "8")
    assert read(parse("127"))[0] == Number(127)
    assert read(parse("128"))[0] == Error("invalid number")
    assert read(parse("-128"))[0] == Number(-128)


@pytest.mark.parametrize("bits", ["1", "many"])
def test_bad_int_bits(monkeypatch, bits):
    monkeypatch.setenv("LISPY_INT_BITS", bits)
    with pytest.raises(LispyConfigError):
        read(parse("1"))


def test_invalid_number_evaluates_to_error(interp):
    result = interp.eval("+ 1 99999999999999999999")
    assert interp.render(result) == "Error: invalid number"


def test_read_foreign_tree():
    # Any tree using the same tag naming can be read
    tree = AstNode(">", "", (
        AstNode("regex"),
        AstNode("expr|qexpr", "", (
            AstNode("char", "{"),
            AstNode("expr|number|regex", "7"),
            AstNode("expr|symbol|regex", "x"),
            AstNode("char", "}"),
        )),
        AstNode("regex"),
    ))
    assert str(read(tree)) == "({7 x})"


def test_unknown_tag():
    assert read(AstNode("string", "hi")) == Error("Unknown node tag 'string'")


# -------------------------------
# Nesting depth
# -------------------------------
def _nested(n: int) -> str:
    return "(" * n + "+ 1 2" + ")" * n


@pytest.mark.parametrize(
    "source,expected",
    [("", 0), ("a b", 0), ("(a {b} (c (d)))", 3), (")((", 2), ("{{}}{}", 2)],
)
def test_nesting_depth(source, expected):
    assert nesting_depth(source) == expected


@pytest.mark.parametrize("n", [80, 200, 256])
def test_deep_nesting_parses(interp, n):
    limit = sys.getrecursionlimit()
    root = parse(_nested(n))
    assert sys.getrecursionlimit() == limit
    assert root.children[1].tag == "expr|sexpr"
    assert interp.render(interp.eval(_nested(n))) == "3"


def test_nesting_beyond_limit():
    limit = sys.getrecursionlimit()
    with pytest.raises(LispySyntaxError, match="nesting too deep"):
        parse(_nested(257))
    assert sys.getrecursionlimit() == limit


def test_nesting_limit_from_config(monkeypatch):
    monkeypatch.setenv("LISPY_MAX_NESTING", "3")
    assert str(read(parse("{(1)}"))) == "({(1)})"
    with pytest.raises(LispySyntaxError, match="nesting too deep"):
        parse("(((({1}))))")


def test_parser_recursion_becomes_syntax_error(monkeypatch):
    g = LispyGrammar()

    def exhausted(*args, **kwargs):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(g.program, "parse_string", exhausted)
    limit = sys.getrecursionlimit()
    with pytest.raises(LispySyntaxError, match="nesting too deep"):
        g.parse("((1))")
    assert sys.getrecursionlimit() == limit


# -------------------------------
# Hypothesis tests
# -------------------------------
symbol_strat = st.text(alphabet="abcxyz_+-*/\\=<>!&%^", min_size=1, max_size=6).filter(
    lambda s: not s.lstrip("-").isdigit()
)
number_strat = st.integers(min_value=-10**6, max_value=10**6).map(str)
atom_strat = st.one_of(symbol_strat, number_strat)


def _to_source(children):
    return st.one_of(
        st.lists(children, max_size=4).map(lambda xs: "(" + " ".join(xs) + ")"),
        st.lists(children, max_size=4).map(lambda xs: "{" + " ".join(xs) + "}"),
    )


source_strat = st.recursive(atom_strat, _to_source, max_leaves=10)


@given(source_strat)
def test_read_renders_back(source):
    assert str(read(parse(source))) == f"({source})"
