from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.errors import CalcyRedefinitionError, CalcyRuntimeError, CalcyTypeError
from calcy.evaluation.apply import VALUE_KINDS
from calcy.evaluation.context import EvaluationContext
from calcy.types.ast import Symbol
from calcy.types.values import CallMode, Closure


def split_param(param: Symbol, form: Symbol) -> tuple[Symbol, str]:
    """`x:number` -> (x, 'number'); a bare `x` accepts any value."""
    name, sep, kind = param.id.partition(":")
    if not sep:
        return param, "any"
    if not name or kind not in VALUE_KINDS:
        raise CalcyTypeError(
            f'"{form}" parameter "{param}" should be name:kind with kind one of '
            f'{", ".join(VALUE_KINDS)}'
        )
    return Symbol(name), kind


def _make_closure(node: Node, ctx: EvaluationContext, mode: CallMode) -> Closure:
    head, params, body = node.items
    names, kinds = [], []
    for param in params:
        name, kind = split_param(param, head)
        # Keywords can never be shadowed, so reject them before any call happens
        if ctx.env.is_reserved(name):
            raise CalcyRedefinitionError(f'Can\'t redefine built-in form "{name}"')
        if name in names:
            raise CalcyRuntimeError(f'Duplicate parameter "{name}" in "{head}"')
        names.append(name)
        kinds.append(kind)
    # The current frame is captured by reference, not copied
    return Closure(tuple(names), body, ctx.env, mode, tuple(kinds))


def function_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """(function (params) body) and its alias (lambda (params) body)."""
    return _make_closure(node, ctx, CallMode.EAGER)


def call_by_name_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """(callByName (params) body): arguments arrive unevaluated, as thunks."""
    return _make_closure(node, ctx, CallMode.BY_NAME)
