from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from calcy import Node, Value
from calcy.builtin.env_builtin import standard_environment
from calcy.config import EvaluatorConfig
from calcy.errors import CalcyError
from calcy.evaluation.apply import force
from calcy.evaluation.context import EvaluationContext
from calcy.evaluation.evaluator import evaluate
from calcy.reader.parser import parse, parse_program
from calcy.types.ast import List, Symbol
from calcy.debug_utils.pprint import pformat

logger = logging.getLogger(__name__)

PROMPT = "calcy> "
DEFINE = Symbol("define")


def defined_name(node: Node) -> Optional[Symbol]:
    """The name bound by a `(define name value)` form, else None."""
    if isinstance(node, List) and len(node) == 3 and node.head == DEFINE:
        name = node[1]
        if isinstance(name, Symbol):
            return name
    return None


class Interpreter:
    """
    A calcy session. Holds the global environment for its lifetime and
    evaluates source text against it, one top-level form at a time.
    """
    def __init__(self, config: Optional[EvaluatorConfig] = None):
        self.config = config if config is not None else EvaluatorConfig()
        self.config.ensure_recursion_headroom()
        self.env = standard_environment()

    def evaluate_node(self, node: Node) -> Value:
        ctx = EvaluationContext(self.env, self.config)
        value = evaluate(node, ctx)
        try:
            return force(value, ctx, evaluate)
        except CalcyError:
            # A deferred definition whose value fails is withdrawn
            name = defined_name(node)
            if name is not None:
                self.env.forget(name, value)
            raise

    def eval(self, code: str) -> Value:
        """Evaluate exactly one form; the result is always forced."""
        return self.evaluate_node(parse(code))

    def eval_program(self, code: str) -> Optional[Value]:
        """Evaluate every form in `code` in order and return the last result."""
        result = None
        for node in parse_program(code):
            result = self.evaluate_node(node)
        return result

    def rep(self, line: str) -> Optional[str]:
        """Read-eval-print one line; errors come back as their message."""
        if not line.strip():
            return None
        try:
            return f"= {pformat(self.eval(line))}"
        except CalcyError as e:
            logger.debug("Evaluation of %r failed: %r", line, e)
            return str(e)


def repl(
    interpreter: Optional[Interpreter] = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    prompt: str = PROMPT,
) -> None:
    """Line-oriented loop until end of input."""
    if interpreter is None:
        interpreter = Interpreter()
    interactive = stdin.isatty()
    if interactive:
        try:
            import readline as _  # line editing and history for input()
        except ImportError:
            pass
    while True:
        if interactive:
            try:
                line = input(prompt)
            except EOFError:
                stdout.write("\n")
                return
        else:
            line = stdin.readline()
            if not line:
                return
        output = interpreter.rep(line)
        if output is not None:
            print(output, file=stdout)
