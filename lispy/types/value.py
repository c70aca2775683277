"""Value variants for Lispy.

Every value owns its children outright. `copy` produces a deep copy sharing
nothing with the source, and `delete` releases everything a value owns, after
which a list is empty. Lists hand children over with `pop`/`take`/`join`, so a
child is only ever reachable from one parent.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from lispy import BuiltinFn


class Number:
    """Exact integer."""

    __slots__ = ("num",)
    TYPE_NAME = "Number"

    def __init__(self, num: int):
        self.num: int = num

    def copy(self) -> Number:
        return Number(self.num)

    def delete(self) -> None:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.num == other.num

    def __str__(self) -> str:
        return str(self.num)

    def __repr__(self) -> str:
        return f"Number({self.num!r})"


class Error:
    """A diagnostic carried as an ordinary value."""

    __slots__ = ("err",)
    TYPE_NAME = "Error"

    def __init__(self, fmt: str, *args):
        self.err: str = fmt % args if args else fmt

    def copy(self) -> Error:
        return Error(self.err)

    def delete(self) -> None:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and self.err == other.err

    def __str__(self) -> str:
        return f"Error: {self.err}"

    def __repr__(self) -> str:
        return f"Error({self.err!r})"


class Symbol:
    __slots__ = ("sym",)
    TYPE_NAME = "Symbol"

    def __init__(self, name: str):
        self.sym: str = name

    def copy(self) -> Symbol:
        return Symbol(self.sym)

    def delete(self) -> None:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.sym == other.sym

    def __str__(self) -> str:
        return self.sym

    def __repr__(self) -> str:
        return f"Symbol({self.sym!r})"


class _Expr:
    """Shared behaviour of the two list variants."""

    __slots__ = ("cells",)
    OPEN = ""
    CLOSE = ""

    def __init__(self, cells: Optional[Iterable] = None):
        self.cells: list = list(cells) if cells is not None else []

    def add(self, child) -> _Expr:
        self.cells.append(child)
        return self

    def pop(self, i: int = 0):
        """Detach and return the child at `i`; the caller now owns it."""
        return self.cells.pop(i)

    def take(self, i: int = 0):
        """Detach the child at `i` and delete this list with everything left in it."""
        result = self.pop(i)
        self.delete()
        return result

    def join(self, other: _Expr) -> _Expr:
        """Move every child of `other` to the end of this list, consuming `other`."""
        while other.cells:
            self.add(other.pop(0))
        other.delete()
        return self

    def copy(self) -> _Expr:
        return type(self)(cell.copy() for cell in self.cells)

    def delete(self) -> None:
        for cell in self.cells:
            cell.delete()
        self.cells.clear()

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator:
        return iter(self.cells)

    def __getitem__(self, i: int):
        return self.cells[i]

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.cells == other.cells

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.OPEN)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.CLOSE)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cells!r})"


class SExpr(_Expr):
    """Evaluable list: the head is applied to the rest."""

    __slots__ = ()
    TYPE_NAME = "S-Expression"
    OPEN = "("
    CLOSE = ")"


class QExpr(_Expr):
    """Literal list: evaluates to itself."""

    __slots__ = ()
    TYPE_NAME = "Q-Expression"
    OPEN = "{"
    CLOSE = "}"


class Builtin:
    """A native operation taking (env, args) and returning a value."""

    __slots__ = ("name", "func")
    TYPE_NAME = "Function"

    def __init__(self, name: str, func: BuiltinFn):
        self.name: str = name
        self.func: BuiltinFn = func

    def copy(self) -> Builtin:
        # the operation itself is code, not owned data
        return Builtin(self.name, self.func)

    def delete(self) -> None:
        pass

    def __eq__(self, other) -> bool:
        return isinstance(other, Builtin) and self.func is other.func

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"
