"""Core evaluator for the Lispy interpreter.

Errors are values: an S-expression evaluates all of its children, then the
first Error in position order replaces the whole expression.
"""

from __future__ import annotations

import logging

from lispy.types import (
    Environment, Error, SExpr, Symbol, Value,
)
from lispy.evaluation.apply import apply

logger = logging.getLogger(__name__)


def evaluate(env: Environment, v: Value) -> Value:
    """Evaluate `v` in `env`, consuming it and returning a fresh value."""
    match v:
        case Symbol():
            x = env.get(v.sym)
            v.delete()
            return x
        case SExpr():
            return evaluate_sexpr(env, v)

    # --- Everything else evaluates to itself ---
    return v


def evaluate_sexpr(env: Environment, v: SExpr) -> Value:
    for i, cell in enumerate(v.cells):
        v.cells[i] = evaluate(env, cell)

    for i, cell in enumerate(v.cells):
        if isinstance(cell, Error):
            return v.take(i)

    # Empty application is the identity
    if len(v) == 0:
        return v

    if len(v) == 1:
        return v.take(0)

    f = v.pop(0)
    logger.debug("applying %s to %s", f, v)
    return apply(env, f, v, evaluate)
