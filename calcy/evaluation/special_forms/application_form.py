from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.evaluation.apply import apply, force
from calcy.evaluation.context import EvaluationContext
from calcy.debug_utils.pprint import pformat


def application_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """(head arg...): the head is forced; arguments are handled by the callee's mode."""
    head, *args = node.items
    fn = force(evaluate_fn(head, ctx), ctx, evaluate_fn)
    return apply(fn, pformat(head), args, ctx, evaluate_fn)
