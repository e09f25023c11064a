"""Application engine for calcy.

This module centralizes the argument-passing semantics of the interpreter:
- Forcing thunks at the sites that need a concrete value.
- Deferring argument expressions into thunks for by-name and by-need calls.
- Application of native functions (eager, arity and kind checked).
- Application of closures, eager or deferred depending on the closure's
  mode and the active strategy.

Keeping this logic in one place prevents duplication between the evaluator
and the special forms.
"""

from __future__ import annotations

from typing import Optional, Sequence

from calcy import EvaluatorFn, Node, Value
from calcy.errors import CalcyRuntimeError
from calcy.evaluation.context import EvaluationContext
from calcy.evaluation.dispatcher import check_arity, expectation_error
from calcy.types.ast import List, Number, Symbol
from calcy.types.values import CallMode, Closure, NativeFunction, Thunk

VALUE_KINDS = ("number", "symbol", "list", "function", "nativeFunction", "any")


def value_kind(value: Value) -> str:
    match value:
        case Number():
            return "number"
        case Symbol():
            return "symbol"
        case List():
            return "list"
        case Closure():
            return "function"
        case NativeFunction():
            return "nativeFunction"
        case Thunk():
            return "thunk"
    raise CalcyRuntimeError(f"Unknown value {value!r}")


def force(value: Value, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """Evaluate thunks until a concrete value is produced.

    Each link of a thunk chain is evaluated one level deeper, so a program
    that keeps returning thunks runs into the depth budget.
    """
    while isinstance(value, Thunk):
        ctx = ctx.deeper()
        value = value.force(evaluate_fn, ctx)
    return value


def check_kind(name: str, position: int, kind: str, value: Value) -> None:
    if kind != "any" and value_kind(value) != kind:
        raise expectation_error(name, position, kind, value)


def defer(
    node: Node,
    ctx: EvaluationContext,
    memoize: Optional[bool] = None,
) -> Value:
    """Pass `node` without evaluating it.

    Numbers and symbols that are already bound are passed as their value:
    bindings never change, so reading them now or later is the same. Anything
    else becomes a thunk over the caller's frame.
    """
    if memoize is None:
        memoize = ctx.config.memoize_thunks
    if isinstance(node, Number):
        return node
    if isinstance(node, Symbol) and ctx.env.resolves(node):
        return ctx.env.lookup(node)
    return Thunk(node, ctx.env, memoize)


def apply_native(
    fn: NativeFunction,
    arg_nodes: Sequence[Node],
    ctx: EvaluationContext,
    evaluate_fn: EvaluatorFn,
) -> Value:
    # Arity is checked before any argument is evaluated
    check_arity(fn.name, fn.arity, len(arg_nodes))
    args = [force(evaluate_fn(arg, ctx), ctx, evaluate_fn) for arg in arg_nodes]
    if fn.kinds is not None:
        for position, (kind, arg) in enumerate(zip(fn.kinds, args), start=1):
            check_kind(fn.name, position, kind, arg)
    return fn(*args)


def apply_closure(
    fn: Closure,
    name: str,
    arg_nodes: Sequence[Node],
    ctx: EvaluationContext,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a closure to unevaluated argument expressions.

    Parameters:
    - fn: The Closure being applied.
    - name: Printed form of the head, for error messages.
    - arg_nodes: The argument expressions, still unevaluated.
    - ctx: The caller's context; arguments are evaluated (or captured) in it.

    Behavior:
    - An EAGER closure under call-by-value evaluates every argument before
      binding. The results are bound as they are, so an explicit `lazy`
      argument arrives as a thunk.
    - A BY_NAME closure, or any closure under the name and need strategies,
      binds deferred arguments (see `defer`).
    - A parameter declared with a kind (`x:number`) is strict: its argument is
      forced and checked before the call.
    - The body runs in a fresh child of the closure's captured frame.
    """
    check_arity(name, fn.arity, len(arg_nodes))
    eager = fn.mode is CallMode.EAGER and not ctx.config.defers_arguments
    args = []
    for position, (kind, arg) in enumerate(zip(fn.kinds, arg_nodes), start=1):
        value = evaluate_fn(arg, ctx) if eager else defer(arg, ctx)
        if kind != "any":
            value = force(value, ctx, evaluate_fn)
            check_kind(name, position, kind, value)
        args.append(value)
    frame = fn.env.child(fn.params, args)
    return evaluate_fn(fn.body, ctx.with_env(frame))


def apply(
    head: Value,
    name: str,
    arg_nodes: Sequence[Node],
    ctx: EvaluationContext,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Closure or a NativeFunction.

    - For Closure, defer to apply_closure.
    - For NativeFunction, defer to apply_native.
    - Otherwise, raise a runtime error.
    """
    if isinstance(head, Closure):
        return apply_closure(head, name, arg_nodes, ctx, evaluate_fn)
    if isinstance(head, NativeFunction):
        return apply_native(head, arg_nodes, ctx, evaluate_fn)
    raise CalcyRuntimeError(f'"{name}" is not a function')
