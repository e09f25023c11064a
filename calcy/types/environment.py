"""Runtime environment for calcy.

The Environment stores bindings of Symbols to values and supports nested
scopes via an `outer` link. Frames are shared by reference between every
closure and thunk that captured them, so a frame only ever gains keys: an
existing binding is never replaced, which keeps sharing safe without copying.
"""

from __future__ import annotations

from typing import Iterable, Optional

from calcy import Value
from calcy.errors import CalcyRedefinitionError, CalcyUnboundSymbol
from calcy.types.ast import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values with a reserved keyword set."""

    __slots__ = ("vars", "outer", "reserved")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        reserved: Iterable[Symbol] = (),
    ):
        self.vars: dict[Symbol, Value] = {}
        self.outer: Environment | None = outer
        # Children share the root's keyword set
        self.reserved: frozenset[Symbol] = (
            outer.reserved if outer is not None else frozenset(reserved)
        )

    def is_reserved(self, name: Symbol) -> bool:
        return name in self.reserved

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def resolves(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def lookup(self, name: Symbol) -> Value:
        """Look up the value bound to `name`, walking outwards to the global frame.

        Raises CalcyUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is None:
            raise CalcyUnboundSymbol(
                f'Can\'t find "{name}" variable. Use `(define {name} ...)` to define it'
            )
        return env.vars[name]

    def ensure_bindable(self, name: Symbol) -> None:
        """Raise CalcyRedefinitionError unless `bind(name, ...)` would succeed."""
        if self.is_reserved(name):
            raise CalcyRedefinitionError(f'Can\'t redefine built-in form "{name}"')
        if self.resolves(name):
            raise CalcyRedefinitionError(f'Can\'t redefine "{name}" variable')

    def bind(self, name: Symbol, value: Value) -> None:
        """Bind `name` to `value` in this frame.

        Raises CalcyRedefinitionError if `name` is a reserved keyword or already
        resolves from this frame.
        """
        self.ensure_bindable(name)
        self.vars[name] = value

    def child(
        self, params: Iterable[Symbol] = (), values: Iterable[Value] = ()
    ) -> Environment:
        """Return a new frame chained to this one, holding `params` bound to `values`.

        Parameters may shadow outer bindings but never reserved keywords.
        """
        frame = Environment(outer=self)
        for name, value in zip(params, values):
            if self.is_reserved(name):
                raise CalcyRedefinitionError(f'Can\'t redefine built-in form "{name}"')
            frame.vars[name] = value
        return frame

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, Value]) -> None:
        """Bulk-bind a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.bind(k, v)

    def forget(self, name: Symbol, value: Value) -> None:
        """Undo `bind(name, value)` in this frame.

        Only the session uses this, to withdraw a top-level definition whose
        value failed. Nothing happens unless `name` is bound to `value` here.
        """
        if self.vars.get(name) is value:
            del self.vars[name]

    def __repr__(self) -> str:
        names = " ".join(str(k) for k in self.vars)
        outer = " -> ..." if self.outer is not None else ""
        return f"<Environment [{names}]{outer}>"
