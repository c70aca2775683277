"""Convert a parse tree into Lispy values.

Any node object with `tag`, `contents` and `children` attributes is accepted,
so trees from another parser can be read as long as they use the same tag
naming: a tag containing 'number', 'symbol', 'sexpr' or 'qexpr', or the bare
root tag '>'.
"""

from __future__ import annotations

import logging

from lispy import config
from lispy.types import Error, Number, QExpr, SExpr, Symbol, Value

logger = logging.getLogger(__name__)

# Structural tokens that carry no value
BRACKETS = frozenset("(){}")


def read_num(node) -> Value:
    lo, hi = config.get_int_range()
    try:
        x = int(node.contents, 10)
    except ValueError:
        return Error("invalid number")
    if x < lo or x > hi:
        return Error("invalid number")
    return Number(x)


def read(node) -> Value:
    """Build a value from `node` and, for lists, all of its children."""
    tag = node.tag
    if "number" in tag:
        return read_num(node)
    if "symbol" in tag:
        return Symbol(node.contents)

    if tag == ">" or "sexpr" in tag:
        v = SExpr()
    elif "qexpr" in tag:
        v = QExpr()
    else:
        logger.debug("unknown node tag %r", tag)
        return Error("Unknown node tag '%s'", tag)

    for child in node.children:
        if child.contents in BRACKETS or child.tag == "regex":
            continue
        v.add(read(child))
    return v
