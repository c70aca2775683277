"""Application engine for Lispy.

- Builtins receive the calling environment and their argument list.
- Lambdas bind their formals in a new frame whose parent is the closure's
  captured environment.
- Partial application: supplying fewer arguments than formals returns a new
  Lambda over the remaining formals and the partially bound frame.
- Variadic lambdas: the symbol after '&' collects the remaining arguments in a
  Q-expression.

Application consumes both the function and the argument list. The frame of a
completed call is never deleted here: closures created by the body keep it as
their parent.
"""

from __future__ import annotations

import logging

from lispy import BuiltinFn
from lispy.types import (
    Builtin, Environment, Error, Lambda, QExpr, SExpr, Value, type_name,
)

logger = logging.getLogger(__name__)

VARIADIC = "&"


def _variadic_error(args: SExpr) -> Error:
    args.delete()
    return Error("Function format invalid. Symbol '&' not followed by single symbol.")


def apply_lambda(
    env: Environment, fn: Lambda, args: SExpr, evaluate_fn
) -> Value:
    """Apply a Lambda value to already-evaluated arguments.

    Returns the body's value once every formal is bound, otherwise a new Lambda
    expecting the formals still unbound. Supplying more arguments than formals
    (without '&') is an Error.

    `env` is not consulted: the body resolves free names through the captured
    `fn.env`, never the caller's frame. It is accepted so that Lambdas and
    Builtins share one calling convention.
    """
    given = len(args)
    total = len(fn.formals)
    frame = Environment(outer=fn.env)
    formals = fn.formals

    while len(args):
        if len(formals) == 0:
            args.delete()
            return Error(
                "Function passed too many arguments. Got %i, Expected %i.",
                given, total,
            )

        sym = formals.pop(0)
        if sym.sym == VARIADIC:
            if len(formals) != 1:
                return _variadic_error(args)
            rest = formals.pop(0)
            collected = QExpr().join(args)
            frame.put(rest.sym, collected)
            collected.delete()
            break

        val = args.pop(0)
        frame.put(sym.sym, val)
        val.delete()

    args.delete()

    # Arguments ran out right before '&': the rest list is empty
    if len(formals) and formals[0].sym == VARIADIC:
        if len(formals) != 2:
            return _variadic_error(args)
        formals.pop(0)
        rest = formals.pop(0)
        frame.put(rest.sym, QExpr())

    if len(formals):
        logger.debug("partial application of %s, %d formal(s) left", fn, len(formals))
        return Lambda(formals, fn.body, frame)

    body = SExpr().join(fn.body)
    return evaluate_fn(frame, body)


def apply(
    env: Environment, head: Value, args: SExpr, evaluate_fn
) -> Value:
    """Apply either a Lambda or a Builtin.

    - For Lambda, defer to apply_lambda (handling partials and '&').
    - For Builtin, invoke its operation with the runtime env and argument list.
    - Otherwise, consume both and return an Error. This is the only place a
      non-function head is rejected.
    """
    if isinstance(head, Lambda):
        return apply_lambda(env, head, args, evaluate_fn)
    elif isinstance(head, Builtin):
        func: BuiltinFn = head.func
        return func(env, args)
    else:
        err = Error(
            "S-Expression starts with incorrect type. Got %s, Expected %s.",
            type_name(head), "Function",
        )
        logger.debug("cannot apply %s", head)
        head.delete()
        args.delete()
        return err
