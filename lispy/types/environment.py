"""Runtime environment for Lispy.

An Environment is one frame of name -> value bindings plus an `outer` link to
its parent frame. Frames own their bound values; the `outer` link is only used
to navigate the chain and never owns the parent.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.types.value import Error


class Environment:
    """Hierarchical mapping from symbol names to owned values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict = {}
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str):
        """Return a copy of the value bound to `name`.

        Resolution walks from this frame out to the root. An unbound name gives
        an Error value rather than raising.
        """
        env = self.find(name)
        if env is None:
            return Error("Unbound Symbol '%s'", name)
        return env.vars[name].copy()

    def put(self, name: str, value) -> None:
        """Bind a copy of `value` in this frame, releasing any previous value."""
        new = value.copy()
        old = self.vars.get(name)
        if old is not None:
            old.delete()
        self.vars[name] = new

    def define(self, name: str, value) -> None:
        """Bind a copy of `value` in the root frame of this chain."""
        self.root().put(name, value)

    def copy(self) -> Environment:
        """Deep-copy this frame's bindings; the parent is shared, not copied."""
        env = Environment(self.outer)
        for k, v in self.vars.items():
            env.vars[k] = v.copy()
        return env

    def delete(self) -> None:
        for v in self.vars.values():
            v.delete()
        self.vars.clear()

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Whole chain, innermost frame first."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
