from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.evaluation.context import EvaluationContext
from calcy.types.values import Thunk


def lazy_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """(lazy expr): postpone `expr` until a strict position forces it."""
    return Thunk(node.items[1], ctx.env, ctx.config.memoize_thunks)
