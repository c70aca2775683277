"""
Lispy grammar built on pyparsing.

Produces an AstNode tree in the shape the reader expects:

    lispy  : /^/ <expr>* /$/ ;
    expr   : <number> | <symbol> | <sexpr> | <qexpr> ;
    sexpr  : '(' <expr>* ')' ;
    qexpr  : '{' <expr>* '}' ;

The root node is tagged '>' and is framed by two empty 'regex' anchor nodes;
brackets are kept as 'char' leaves.
"""

from __future__ import annotations

import logging
import sys

from pyparsing import (
    Forward, Literal, ParseException, ParseResults, Regex,
    StringEnd, StringStart, ZeroOrMore,
)

from lispy import config
from lispy.errors import LispySyntaxError
from lispy.reader.ast import AstNode

logger = logging.getLogger(__name__)

NUMBER_RE = r"-?[0-9]+"
SYMBOL_RE = r"[a-zA-Z0-9_+\-*\/\\=<>!&%^]+"

# Interpreter frames pyparsing spends per bracket level, with headroom
FRAMES_PER_LEVEL = 24


def nesting_depth(text: str) -> int:
    """Deepest bracket nesting in `text`, ignoring whether brackets balance."""
    depth = deepest = 0
    for ch in text:
        if ch in "({":
            depth += 1
            deepest = max(deepest, depth)
        elif ch in ")}" and depth:
            depth -= 1
    return deepest


def _leaf(tag: str):
    return lambda toks: AstNode(tag, toks[0])


def _branch(tag: str):
    def action(toks: ParseResults) -> AstNode:
        children = tuple(
            AstNode("char", t) if isinstance(t, str) else t for t in toks
        )
        return AstNode(tag, "", children)
    return action


class LispyGrammar:
    """Lispy grammar definition using pyparsing"""

    def __init__(self):
        self._setup_grammar()

    def _setup_grammar(self):
        expr = Forward()

        # number before symbol: a lone '-' falls through to symbol
        number = Regex(NUMBER_RE).set_parse_action(_leaf("expr|number|regex"))
        symbol = Regex(SYMBOL_RE).set_parse_action(_leaf("expr|symbol|regex"))

        sexpr = (Literal("(") + ZeroOrMore(expr) + Literal(")")).set_parse_action(
            _branch("expr|sexpr")
        )
        qexpr = (Literal("{") + ZeroOrMore(expr) + Literal("}")).set_parse_action(
            _branch("expr|qexpr")
        )
        expr <<= number | symbol | sexpr | qexpr

        self.number = number
        self.symbol = symbol
        self.sexpr = sexpr
        self.qexpr = qexpr
        self.expr = expr
        self.program = StringStart() + ZeroOrMore(expr) + StringEnd()

    def parse(self, text: str) -> AstNode:
        """Parse `text` into a root AstNode.

        Raises LispySyntaxError when the text does not match the grammar or
        nests deeper than the configured limit.
        """
        depth = nesting_depth(text)
        max_depth = config.get_max_nesting()
        if depth > max_depth:
            raise LispySyntaxError(
                f"<stdin>: nesting too deep ({depth} levels, limit {max_depth})"
            )

        # pyparsing descends several frames per bracket level
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(limit + depth * FRAMES_PER_LEVEL)
        try:
            toks = self.program.parse_string(text, parse_all=True)
        except ParseException as e:
            raise LispySyntaxError(f"<stdin>:{e.lineno}:{e.col}: {e.msg}") from e
        except RecursionError as e:
            raise LispySyntaxError(f"<stdin>: nesting too deep ({depth} levels)") from e
        finally:
            sys.setrecursionlimit(limit)
        children = (AstNode("regex"), *toks, AstNode("regex"))
        root = AstNode(">", "", children)
        logger.debug("parsed %r -> %s", text, root)
        return root


_default_grammar: LispyGrammar | None = None


def parse(text: str) -> AstNode:
    global _default_grammar
    if _default_grammar is None:
        _default_grammar = LispyGrammar()
    return _default_grammar.parse(text)
