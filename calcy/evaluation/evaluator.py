"""Core evaluator for the calcy interpreter.

Every node, atom or list, is resolved through the rule dispatcher; the
evaluator itself only enforces the depth budget and emits the trace. Each
nested `evaluate` call runs one level deeper, so unbounded recursion in the
evaluated program surfaces as CalcyRecursionLimitExceeded instead of a host
stack overflow.
"""

from __future__ import annotations

import logging
from typing import Optional

from calcy import Node, Value
from calcy.config import EvaluatorConfig
from calcy.errors import CalcyRecursionLimitExceeded
from calcy.evaluation.apply import force
from calcy.evaluation.context import EvaluationContext
from calcy.evaluation.special_forms import DISPATCHER
from calcy.types.environment import Environment
from calcy.debug_utils.pprint import pformat

logger = logging.getLogger(__name__)


def evaluate(node: Node, ctx: EvaluationContext) -> Value:
    """
    Evaluate `node` in `ctx`. The result may be a Thunk when the active
    strategy deferred it; use `force` where a concrete value is required.
    """
    if ctx.depth > ctx.config.max_depth:
        raise CalcyRecursionLimitExceeded(ctx.config.max_depth)
    if ctx.config.trace:
        logger.debug("%s%s", "  " * ctx.depth, pformat(node))
    return DISPATCHER.dispatch(node, ctx.deeper(), evaluate)


def global_environment() -> Environment:
    """A fresh global frame whose reserved keywords are the dispatcher's operators."""
    return Environment(reserved=DISPATCHER.operators)


def run(
    node: Node,
    env: Optional[Environment] = None,
    config: Optional[EvaluatorConfig] = None,
) -> Value:
    """Evaluate one top-level form and force its result."""
    if config is None:
        config = EvaluatorConfig()
    if env is None:
        from calcy.builtin.env_builtin import standard_environment

        env = standard_environment()
    config.ensure_recursion_headroom()
    ctx = EvaluationContext(env, config)
    return force(evaluate(node, ctx), ctx, evaluate)
