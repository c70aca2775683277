from lispy.reader.ast import AstNode
from lispy.reader.grammar import LispyGrammar, parse
from lispy.reader.reader import read

__all__ = ["AstNode", "LispyGrammar", "parse", "read"]
