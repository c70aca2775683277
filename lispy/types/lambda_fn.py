"""Closure representation for Lispy."""

from __future__ import annotations

from io import StringIO

from lispy.types.environment import Environment
from lispy.types.value import QExpr


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env.

    The closure owns `formals`, `body` and the frame `env`. The frame's parent
    is the defining environment and is shared between copies.
    """

    __slots__ = ("formals", "body", "env")
    TYPE_NAME = "Function"

    def __init__(self, formals: QExpr, body: QExpr, env: Environment | None = None):
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(self.formals.copy(), self.body.copy(), self.env.copy())

    def delete(self) -> None:
        self.formals.delete()
        self.body.delete()
        self.env.delete()

    def __eq__(self, other) -> bool:
        """Same formals, body and frame bindings. The frame's parent is not compared."""
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
            and self.env.vars == other.env.vars
        )

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
