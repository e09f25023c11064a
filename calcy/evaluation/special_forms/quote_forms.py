from calcy import Node, Value, EvaluatorFn
from calcy.errors import CalcyTypeError
from calcy.evaluation.apply import force
from calcy.evaluation.context import EvaluationContext
from calcy.types.ast import node_kind
from calcy.debug_utils.pprint import pformat


def quote_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    return node.items[1]


def eval_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """(eval expr): evaluate `expr` to code, then evaluate that code here."""
    code = force(evaluate_fn(node.items[1], ctx), ctx, evaluate_fn)
    if node_kind(code) is None:
        raise CalcyTypeError(
            f'"eval" expects code as the 1 argument, instead got "{pformat(code)}"'
        )
    return evaluate_fn(code, ctx)
