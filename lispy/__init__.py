# Core type aliases for Lispy's data model.
#
# Values are instances of the closed set of variants in lispy.types
# (Number, Error, Symbol, SExpr, QExpr, Builtin, Lambda). Language-level
# failures are Error values; lispy.errors only covers host-level failures.

from typing import Any, Callable

# Builtin signature: (environment, argument S-expression) -> value
BuiltinFn = Callable[[Any, Any], Any]

__version__ = "0.2.0"
