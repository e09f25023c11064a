from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.errors import CalcyRuntimeError
from calcy.evaluation.context import EvaluationContext


def number_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    return node


def symbol_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """Variable reference. Keywords name forms, not values, and cannot be read."""
    if ctx.env.is_reserved(node):
        raise CalcyRuntimeError(f'Can\'t get value of built-in form "{node}"')
    return ctx.env.lookup(node)
