"""Built-in functions for the Lispy runtime environment.

Every builtin takes the calling environment and its argument S-expression,
which it consumes. Arguments are validated before anything else happens; a
failed check deletes the arguments and returns an Error value.
"""
from __future__ import annotations

import logging
import operator
from typing import Optional

from lispy import BuiltinFn
from lispy.types import (
    Builtin, Environment, Error, Lambda, Number, QExpr, SExpr, Symbol, Value,
    type_name,
)
from lispy.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


# -------------------------------
# Argument checks
# -------------------------------
def _check_count(func: str, args: SExpr, expected: int) -> Optional[Error]:
    if len(args) != expected:
        err = Error(
            "Function '%s' passed incorrect number of arguments. Got %i, Expected %i.",
            func, len(args), expected,
        )
        args.delete()
        return err
    return None


def _check_type(func: str, args: SExpr, i: int, expected: type) -> Optional[Error]:
    if not isinstance(args[i], expected):
        err = Error(
            "Function '%s' passed incorrect type for argument %i. Got %s, Expected %s.",
            func, i, type_name(args[i]), expected.TYPE_NAME,
        )
        args.delete()
        return err
    return None


def _check_symbols(func: str, args: SExpr, syms: QExpr) -> Optional[Error]:
    for sym in syms:
        if not isinstance(sym, Symbol):
            err = Error(
                "Function '%s' cannot define non-symbol. Got %s, Expected %s.",
                func, type_name(sym), Symbol.TYPE_NAME,
            )
            args.delete()
            return err
    return None


# -------------------------------
# Arithmetic
# -------------------------------
def _trunc_div(x: int, y: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def _trunc_mod(x: int, y: int) -> int:
    return x - y * _trunc_div(x, y)


def _int_pow(x: int, y: int) -> int:
    if y >= 0:
        return x ** y
    # 1 / x**|y| truncated toward zero
    if x == 1:
        return 1
    if x == -1:
        return 1 if y % 2 == 0 else -1
    return 0


OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _trunc_div,
    "%": _trunc_mod,
    "^": _int_pow,
}

# Result of applying an operator to no arguments
IDENTITIES = {"+": 0, "*": 1}


def _divides_by_zero(op: str, x: int, y: int) -> bool:
    if op in ("/", "%"):
        return y == 0
    if op == "^":
        return x == 0 and y < 0
    return False


def builtin_op(env: Environment, args: SExpr, op: str) -> Value:
    for i in range(len(args)):
        err = _check_type(op, args, i, Number)
        if err is not None:
            return err

    if len(args) == 0:
        if op in IDENTITIES:
            return Number(IDENTITIES[op])
        return Error(
            "Function '%s' passed incorrect number of arguments. Got 0, Expected at least 1.",
            op,
        )

    x = args.pop(0)
    if op == "-" and len(args) == 0:
        x.num = -x.num

    while len(args):
        y = args.pop(0)
        if _divides_by_zero(op, x.num, y.num):
            x.delete()
            y.delete()
            args.delete()
            return Error("Division By Zero!")
        x.num = OPS[op](x.num, y.num)
        y.delete()

    args.delete()
    return x


def builtin_add(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "+")


def builtin_sub(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "-")


def builtin_mul(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "*")


def builtin_div(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "/")


def builtin_mod(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "%")


def builtin_pow(env: Environment, args: SExpr) -> Value:
    return builtin_op(env, args, "^")


# -------------------------------
# List operations
# -------------------------------
def builtin_list(env: Environment, args: SExpr) -> Value:
    return QExpr().join(args)


def builtin_head(env: Environment, args: SExpr) -> Value:
    err = _check_count("head", args, 1) or _check_type("head", args, 0, QExpr)
    if err is not None:
        return err
    if len(args[0]) == 0:
        args.delete()
        return Error("Function 'head' passed {}!")

    v = args.take(0)
    while len(v) > 1:
        v.pop(1).delete()
    return v


def builtin_tail(env: Environment, args: SExpr) -> Value:
    err = _check_count("tail", args, 1) or _check_type("tail", args, 0, QExpr)
    if err is not None:
        return err
    if len(args[0]) == 0:
        args.delete()
        return Error("Function 'tail' passed {}!")

    v = args.take(0)
    v.pop(0).delete()
    return v


def builtin_join(env: Environment, args: SExpr) -> Value:
    for i in range(len(args)):
        err = _check_type("join", args, i, QExpr)
        if err is not None:
            return err

    result = QExpr()
    while len(args):
        result.join(args.pop(0))
    args.delete()
    return result


def builtin_eval(env: Environment, args: SExpr) -> Value:
    err = _check_count("eval", args, 1) or _check_type("eval", args, 0, QExpr)
    if err is not None:
        return err

    x = SExpr().join(args.take(0))
    return evaluate(env, x)


# -------------------------------
# Binding
# -------------------------------
def builtin_var(env: Environment, args: SExpr, func: str) -> Value:
    if len(args) == 0:
        return Error(
            "Function '%s' passed incorrect number of arguments. Got 0, Expected at least 1.",
            func,
        )
    err = _check_type(func, args, 0, QExpr)
    if err is not None:
        return err

    syms = args[0]
    err = _check_symbols(func, args, syms)
    if err is not None:
        return err

    if len(syms) != len(args) - 1:
        err = Error(
            "Function '%s' passed too many arguments for symbols. Got %i, Expected %i.",
            func, len(args) - 1, len(syms),
        )
        args.delete()
        return err

    for i, sym in enumerate(syms):
        if func == "def":
            env.define(sym.sym, args[i + 1])
        else:
            env.put(sym.sym, args[i + 1])
    logger.debug("%s bound %s", func, syms)

    args.delete()
    return SExpr()


def builtin_def(env: Environment, args: SExpr) -> Value:
    """Bind globally, in the root frame."""
    return builtin_var(env, args, "def")


def builtin_put(env: Environment, args: SExpr) -> Value:
    """Bind in the current frame."""
    return builtin_var(env, args, "=")


# -------------------------------
# Lambda construction
# -------------------------------
def builtin_lambda(env: Environment, args: SExpr) -> Value:
    err = (
        _check_count("\\", args, 2)
        or _check_type("\\", args, 0, QExpr)
        or _check_type("\\", args, 1, QExpr)
    )
    if err is not None:
        return err
    err = _check_symbols("\\", args, args[0])
    if err is not None:
        return err

    formals = args.pop(0)
    body = args.pop(0)
    args.delete()
    return Lambda(formals, body, Environment(outer=env))


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, BuiltinFn] = {
    "+": builtin_add,
    "-": builtin_sub,
    "*": builtin_mul,
    "/": builtin_div,
    "%": builtin_mod,
    "^": builtin_pow,
    "list": builtin_list,
    "head": builtin_head,
    "tail": builtin_tail,
    "join": builtin_join,
    "eval": builtin_eval,
    "def": builtin_def,
    "=": builtin_put,
    "\\": builtin_lambda,
}


def register(env: Environment) -> None:
    for name, func in BUILTINS.items():
        fn = Builtin(name, func)
        env.put(name, fn)
        fn.delete()
