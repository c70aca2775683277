from typing import Union

from lispy.types.value import Number, Error, Symbol, SExpr, QExpr, Builtin
from lispy.types.lambda_fn import Lambda
from lispy.types.environment import Environment

# The closed set of runtime values
Value = Union[Number, Error, Symbol, SExpr, QExpr, Builtin, Lambda]


def render(value: Value) -> str:
    """Canonical textual form of a value."""
    return str(value)


def type_name(value: Value) -> str:
    return value.TYPE_NAME


__all__ = [
    "Value", "Number", "Error", "Symbol", "SExpr", "QExpr", "Builtin", "Lambda",
    "Environment", "render", "type_name",
]
