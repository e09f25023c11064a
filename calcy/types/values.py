"""Runtime values that are not plain AST data: natives, closures and thunks."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

from calcy import Value, EvaluatorFn
from calcy.types.ast import Node, Symbol

if TYPE_CHECKING:
    from calcy.types.environment import Environment
    from calcy.evaluation.context import EvaluationContext


TRUE = Symbol("true")
FALSE = Symbol("false")


def to_boolean(flag: bool) -> Symbol:
    return TRUE if flag else FALSE


class CallMode(Enum):
    EAGER = "function"
    BY_NAME = "callByName"


class NativeFunction:
    """A host callable with a fixed arity and optional per-position value kinds."""

    __slots__ = ("name", "arity", "implementation", "kinds")

    def __init__(
        self,
        name: str,
        arity: int,
        implementation: Callable[..., Value],
        kinds: Optional[tuple[str, ...]] = None,
    ):
        self.name = name
        self.arity = arity
        self.implementation = implementation
        self.kinds = kinds

    def __call__(self, *args: Value) -> Value:
        return self.implementation(*args)

    def __repr__(self):
        return f"<native {self.name}>"


class Closure:
    """A first-class function: parameters, body, captured frame and call mode.

    `kinds` holds the declared value kind of each parameter (`any` when the
    parameter was written without one, as in `(function (x:number y) ...)`).
    """

    __slots__ = ("params", "body", "env", "mode", "kinds")

    def __init__(
        self,
        params: tuple[Symbol, ...],
        body: Node,
        env: Environment,
        mode: CallMode = CallMode.EAGER,
        kinds: Optional[tuple[str, ...]] = None,
    ):
        self.params = tuple(params)
        self.kinds = tuple(kinds) if kinds is not None else ("any",) * len(self.params)
        self.body = body
        # Captured by reference; later bindings in this frame stay visible.
        self.env = env
        self.mode = mode

    @property
    def arity(self) -> int:
        return len(self.params)

    def typed_params(self) -> list[str]:
        """Parameters as written, with `:kind` for the typed ones."""
        return [
            str(p) if kind == "any" else f"{p}:{kind}"
            for p, kind in zip(self.params, self.kinds)
        ]

    def __repr__(self):
        return f"<{self.mode.value} ({' '.join(self.typed_params())})>"


_UNFORCED = object()


class Thunk:
    """An expression paired with the frame it must be evaluated in.

    With `memoize` set the first forced value is cached (call-by-need);
    otherwise every force evaluates `expr` again (call-by-name).
    """

    __slots__ = ("expr", "env", "memoize", "_value", "forces")

    def __init__(self, expr: Node, env: Environment, memoize: bool = False):
        self.expr = expr
        self.env = env
        self.memoize = memoize
        self._value = _UNFORCED
        # Number of times `expr` was actually evaluated.
        self.forces = 0

    @property
    def is_forced(self) -> bool:
        return self._value is not _UNFORCED

    @property
    def cached(self) -> Value:
        return None if self._value is _UNFORCED else self._value

    def force(self, evaluate_fn: EvaluatorFn, ctx: EvaluationContext) -> Value:
        """Evaluate `expr` once. The result may itself be a thunk; callers
        that need a concrete value keep forcing (see `apply.force`)."""
        if self._value is not _UNFORCED:
            return self._value
        self.forces += 1
        result = evaluate_fn(self.expr, ctx.with_env(self.env))
        if self.memoize:
            self._value = result
        return result

    def __repr__(self):
        state = "forced" if self.is_forced else "pending"
        return f"<thunk {state} {self.expr!r}>"
