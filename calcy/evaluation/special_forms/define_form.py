from calcy import EvaluatorFn
from calcy import Node, Value
from calcy.evaluation.apply import defer
from calcy.evaluation.context import EvaluationContext


def define_form(node: Node, ctx: EvaluationContext, evaluate_fn: EvaluatorFn) -> Value:
    """
    (define name value)
    Binds `name` in the current frame and returns the bound value. Under
    call-by-need the value expression is deferred instead of evaluated.
    Nothing is bound when the name is taken or the value fails to evaluate.
    """
    _, name, val_expr = node.items
    ctx.env.ensure_bindable(name)
    if ctx.config.defers_definitions:
        value = defer(val_expr, ctx)
    else:
        value = evaluate_fn(val_expr, ctx)
    ctx.env.bind(name, value)
    return value
