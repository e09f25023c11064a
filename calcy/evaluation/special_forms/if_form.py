from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.errors import CalcyTypeError
from calcy.evaluation.apply import force
from calcy.evaluation.context import EvaluationContext
from calcy.types.values import TRUE, FALSE
from calcy.debug_utils.pprint import pformat


def if_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    _, condition, then_expr, else_expr = node.items
    cond = force(evaluate_fn(condition, ctx), ctx, evaluate_fn)
    # Only the selected branch is ever evaluated
    if cond == TRUE:
        return evaluate_fn(then_expr, ctx)
    if cond == FALSE:
        return evaluate_fn(else_expr, ctx)
    raise CalcyTypeError(
        f'"if" condition should evaluate to true or false, instead got "{pformat(cond)}"'
    )
