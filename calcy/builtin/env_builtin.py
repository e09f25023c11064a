"""Built-in functions for the calcy runtime environment.

This module defines arithmetic, comparison and printing natives exposed to
calcy code. Each native is registered under a typed signature written in the
same notation as the dispatcher's rule patterns, e.g. `(+ :number :number)`;
the signature fixes the arity and the value kind expected at each position.
"""
from __future__ import annotations

from typing import Callable

from calcy import Value
from calcy.errors import CalcyRuntimeError, CalcySyntaxError
from calcy.evaluation.apply import VALUE_KINDS
from calcy.evaluation.evaluator import global_environment
from calcy.reader.parser import parse
from calcy.types.ast import List, Number, Symbol
from calcy.types.environment import Environment
from calcy.types.values import FALSE, TRUE, NativeFunction, to_boolean
from calcy.debug_utils.pprint import pformat


def add(a: Number, b: Number) -> Number:
    return Number(a.value + b.value)


def sub(a: Number, b: Number) -> Number:
    return Number(a.value - b.value)


def mul(a: Number, b: Number) -> Number:
    return Number(a.value * b.value)


def div(a: Number, b: Number) -> Number:
    if b.value == 0:
        raise CalcyRuntimeError(f"Division by zero: {pformat(a)} / {pformat(b)}")
    return Number(a.value / b.value)


def lt(a: Number, b: Number) -> Symbol:
    """Return true if a < b, else false."""
    return to_boolean(a.value < b.value)


def gt(a: Number, b: Number) -> Symbol:
    """Return true if a > b, else false."""
    return to_boolean(a.value > b.value)


def num_eq(a: Number, b: Number) -> Symbol:
    """Return true if both numbers are equal, else false."""
    return to_boolean(a.value == b.value)


def print_builtin(value: Value) -> Value:
    """Write the printed form of `value` to stdout and return it unchanged."""
    print(pformat(value))
    return value


NATIVES: list[tuple[str, Callable[..., Value]]] = [
    ("(+ :number :number)", add),
    ("(- :number :number)", sub),
    ("(* :number :number)", mul),
    ("(/ :number :number)", div),
    ("(< :number :number)", lt),
    ("(less :number :number)", lt),
    ("(> :number :number)", gt),
    ("(= :number :number)", num_eq),
    ("(print :any)", print_builtin),
]


def native_from_signature(signature: str, implementation: Callable[..., Value]) -> NativeFunction:
    """Build a NativeFunction from a typed signature such as `(- :number :number)`."""
    node = parse(signature)
    if not isinstance(node, List) or not node.items or not isinstance(node.head, Symbol):
        raise CalcySyntaxError(f"Malformed native signature {signature!r}")
    kinds = []
    for token in node.args:
        kind = token.id.split(":", 1)[1] if isinstance(token, Symbol) and ":" in token.id else None
        if kind not in VALUE_KINDS:
            raise CalcySyntaxError(f"Unknown kind in native signature {signature!r}: {pformat(token)}")
        kinds.append(kind)
    return NativeFunction(str(node.head), len(kinds), implementation, tuple(kinds))


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update(
        {
            Symbol(native.name): native
            for native in (native_from_signature(sig, impl) for sig, impl in NATIVES)
        }
    )
    env.bind(TRUE, TRUE)
    env.bind(FALSE, FALSE)


def standard_environment() -> Environment:
    """Global frame with the reserved keywords and every builtin registered."""
    env = global_environment()
    register(env)
    return env
